from pongcore.models.player.base_player import BYE_PLAYER, Player, is_real_player

__all__ = [
    "Player",
    "BYE_PLAYER",
    "is_real_player",
]
