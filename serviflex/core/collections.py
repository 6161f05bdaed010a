"""Firestore collection names.

Firestore has no DDL or migrations; collections appear on first write.
These constants are the single source of truth for collection names.
"""

CLIENTS = "clients"
PROFESSIONALS = "professionals"
ADMINS = "admins"
ESTABLISHMENTS = "establishments"
PROCEDURES = "procedures"
WORKING_HOURS = "working_hours"
APPOINTMENTS = "appointments"
RATINGS = "ratings"
NOTIFICATIONS = "notifications"

# Subcollection under establishments/{id}
ESTABLISHMENT_MEMBERS = "professionals"

# Collections a user account can live in, in login lookup order
USER_COLLECTIONS = (CLIENTS, PROFESSIONALS, ADMINS)
