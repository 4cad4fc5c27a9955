"""
Hospital Administration Service

A FastAPI-based backend for hospital administration: patients, doctors,
appointments, medical records, billing and resource tracking, backed by
an in-memory repository.
"""

__version__ = "1.0.0"
