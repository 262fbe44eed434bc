"""Modelos y errores del dominio.

Por qué:
- Aquí viven requests, responses y la taxonomía de errores (Pydantic v2).
- El dominio no conoce httpx, CLI ni JSON crudo: solo contratos del backend.
"""
