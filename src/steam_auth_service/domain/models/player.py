"""Steam Player Data Models

Purpose: Represent the public profile Steam returns for a SteamID

Key Components:
- PlayerSummary: One entry of ISteamUser/GetPlayerSummaries
- PersonaState: Online status enum
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class PersonaState(Enum):
    """Steam online status"""
    OFFLINE = 0
    ONLINE = 1
    BUSY = 2
    AWAY = 3
    SNOOZE = 4
    LOOKING_TO_TRADE = 5
    LOOKING_TO_PLAY = 6

    @classmethod
    def _missing_(cls, value):
        # Steam adds states without notice; treat unknown ones as offline
        return cls.OFFLINE


@dataclass
class PlayerSummary:
    """Public Steam profile

    Attributes:
        steam_id: 64-bit SteamID as a string
        persona_name: Display name
        profile_url: Community profile URL
        avatar: 32x32 avatar URL
        avatar_medium: 64x64 avatar URL
        avatar_full: 184x184 avatar URL
        persona_state: Online status
        community_visibility_state: 1 private, 3 public
        real_name: Real name, if public
        country_code: ISO country code, if public
        time_created: Account creation time, if public
    """
    steam_id: str
    persona_name: str
    profile_url: str
    avatar: str = ""
    avatar_medium: str = ""
    avatar_full: str = ""
    persona_state: PersonaState = PersonaState.OFFLINE
    community_visibility_state: int = 1
    real_name: Optional[str] = None
    country_code: Optional[str] = None
    time_created: Optional[datetime] = None

    @property
    def is_public(self) -> bool:
        return self.community_visibility_state == 3

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization"""
        return {
            "steam_id": self.steam_id,
            "persona_name": self.persona_name,
            "profile_url": self.profile_url,
            "avatar": self.avatar,
            "avatar_medium": self.avatar_medium,
            "avatar_full": self.avatar_full,
            "persona_state": self.persona_state.value,
            "community_visibility_state": self.community_visibility_state,
            "real_name": self.real_name,
            "country_code": self.country_code,
            "time_created": self.time_created.isoformat() if self.time_created else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'PlayerSummary':
        """Create from a GetPlayerSummaries player entry"""
        time_created = data.get("timecreated")
        return cls(
            steam_id=str(data["steamid"]),
            persona_name=data.get("personaname", ""),
            profile_url=data.get("profileurl", ""),
            avatar=data.get("avatar", ""),
            avatar_medium=data.get("avatarmedium", ""),
            avatar_full=data.get("avatarfull", ""),
            persona_state=PersonaState(data.get("personastate", 0)),
            community_visibility_state=data.get("communityvisibilitystate", 1),
            real_name=data.get("realname"),
            country_code=data.get("loccountrycode"),
            time_created=(
                datetime.fromtimestamp(time_created, tz=timezone.utc)
                if time_created is not None else None
            ),
        )
