"""
models/ - Domain Models
=======================
Plain dataclasses mirroring the rows of the smart street light schema.
"""
