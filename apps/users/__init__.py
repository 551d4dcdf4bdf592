"""Users app package.

This module initializes the users app. It defines a custom user model
with tenant and landlord roles that logs in by email. Use
``apps.users.models.CustomUser`` as the AUTH_USER_MODEL throughout
the project.
"""
