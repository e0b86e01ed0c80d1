"""
converge: núcleo de convergencia de un agente de gestión de configuración.

Estado deseado → estado actual → diff → aplicar solo lo distinto → updated.
"""

__version__ = "1.0.0"
