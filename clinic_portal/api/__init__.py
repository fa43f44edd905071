"""Request functions for the clinic backend, one module per resource."""
