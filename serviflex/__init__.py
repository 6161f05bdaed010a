"""
Serviflex API.

REST backend for a service marketplace: clients, professionals,
establishments, procedures, working hours, appointments and ratings,
persisted in Cloud Firestore.
"""

__version__ = "0.1.0"
