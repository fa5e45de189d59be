"""Servicios del Core: interceptores de petición y de respuesta."""
