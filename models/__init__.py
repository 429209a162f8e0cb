"""
models/ - Domain Models
=======================
Plain dataclasses for the records the clinic keeps.
"""
