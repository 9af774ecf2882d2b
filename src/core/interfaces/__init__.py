"""Contratos (Protocol) que el Core espera de sus colaboradores.

Por qué:
- Los adaptadores de endpoints dependen de `TextFetcher`, no de httpx.
"""
