"""Adaptadores de I/O: sesión HTTP, cliente de moderación, exportación."""
