"""Servicios del Core (orquestación)."""
