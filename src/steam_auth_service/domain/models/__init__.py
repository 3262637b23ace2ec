"""Domain models for Steam Auth Service"""

from steam_auth_service.domain.models.player import PersonaState, PlayerSummary

__all__ = [
    "PersonaState",
    "PlayerSummary",
]
