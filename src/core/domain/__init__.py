"""Modelos del dominio: credenciales, envelope y petición saliente.

El dominio no conoce httpx ni el backend de persistencia.
"""
