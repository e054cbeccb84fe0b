"""Application-wide constants."""

PROGRAM_NAME = "trogue"
VERSION = "1.0.0"
DESCRIPTION = "A CLI tool for displaying Steam achievements"

STEAM_API_BASE_URL = "http://api.steampowered.com"

ENV_API_KEY = "TROGUE_STEAM_API_KEY"
ENV_STEAM_ID = "TROGUE_STEAM_ID"
ENV_API_URL = "TROGUE_STEAM_API_URL"
ENV_REQUEST_TIMEOUT = "TROGUE_REQUEST_TIMEOUT"

DEFAULT_GAME_PATTERN = "[i] n"
