"""Users app package.

Defines the custom user model (email login) and the actor role lookup
that tells whether a user acts as a player, a coach or a facility owner.
Use ``apps.users.models.CustomUser`` as the AUTH_USER_MODEL throughout
the project.
"""
