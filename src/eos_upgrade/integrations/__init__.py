"""Interfaces to the external system tools the migration drives.

Each integration has an ABC in ``abc.py`` and a subprocess-backed
implementation in ``real.py``. Tests substitute in-memory fakes.
"""
