"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan los adaptadores HTTP.
"""
