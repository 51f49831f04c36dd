"""Krylov subspace methods: incremental orthogonalizers, online QR and Arnoldi iteration."""