"""Registros tipados de la Steam Web API y la Store API.

Por qué:
- Cada endpoint tiene su modelo inmutable declarado sobre `JsonRecord`.
- El dominio no conoce HTTP ni la CLI: solo la forma de los payloads.
"""
