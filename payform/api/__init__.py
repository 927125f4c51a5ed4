"""HTTP apps shipped with the package (the local mock payment service)."""
