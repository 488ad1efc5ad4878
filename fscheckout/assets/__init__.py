"""Static assets injected into the checkout surface."""
