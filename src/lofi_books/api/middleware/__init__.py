"""HTTP middleware: auth, error mapping, request id, timing."""
