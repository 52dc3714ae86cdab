"""Field registry, selection and dispatch of transfer statistics."""
