"""Core de fishpi-client: configuración, dominio, contratos y servicios."""
