"""Data models for the trogue application."""

from .achievement import Achievement, GlobalAchievementRate
from .command import ArgKind, ArgSpec, CommandDescriptor
from .config import AppConfig
from .game import Game

__all__ = [
    "Achievement",
    "AppConfig",
    "ArgKind",
    "ArgSpec",
    "CommandDescriptor",
    "Game",
    "GlobalAchievementRate",
]
