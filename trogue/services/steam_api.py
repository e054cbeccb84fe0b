"""Steam Web API service: owned games, player achievements and global rates."""

from typing import Any

import httpx
import structlog

from ..models import Achievement, Game, GlobalAchievementRate
from .errors import AppError, get_error_service
from .http_client import HttpClientService

log = structlog.stdlib.get_logger()

OWNED_GAMES_PATH = "/IPlayerService/GetOwnedGames/v0001/"
PLAYER_ACHIEVEMENTS_PATH = "/ISteamUserStats/GetPlayerAchievements/v0001/"
GLOBAL_ACHIEVEMENTS_PATH = "/ISteamUserStats/GetGlobalAchievementPercentagesForApp/v0002/"


class SteamApiService:
    """Fetches and maps Steam Web API data for one account.

    Every failure (transport, non-success status, malformed payload) is
    raised as an AppError subclass.
    """

    def __init__(self, http_client: HttpClientService, api_key: str, steam_id: str) -> None:
        """Initialize the Steam API service.

        Args:
            http_client: HTTP client service configured with the API base URL
            api_key: Steam Web API key
            steam_id: 64-bit Steam id of the account to query
        """
        self.http_client = http_client
        self.api_key = api_key
        self.steam_id = steam_id

    async def fetch_owned_games(self) -> list[Game]:
        """Fetch the account's owned games in the order Steam returns them."""
        params = {
            "key": self.api_key,
            "steamid": self.steam_id,
            "format": "json",
            "include_appinfo": "1",
        }
        data = await self._get_json(OWNED_GAMES_PATH, params, "fetch_owned_games")

        try:
            raw_games = data["response"].get("games", [])
            games = [_parse_game(raw) for raw in raw_games]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise self._decode_failure(e, OWNED_GAMES_PATH, "fetch_owned_games") from e

        log.info("Owned games fetched", count=len(games))
        return games

    async def fetch_achievements(self, app_id: int) -> tuple[str, list[Achievement]]:
        """Fetch the player's achievements for a game.

        Returns:
            Tuple of the game's display name and its achievements
        """
        params = {
            "appid": str(app_id),
            "key": self.api_key,
            "steamid": self.steam_id,
            "l": "en",
        }
        data = await self._get_json(PLAYER_ACHIEVEMENTS_PATH, params, "fetch_achievements")

        try:
            stats = data["playerstats"]
            game_name = str(stats.get("gameName", ""))
            achievements = [_parse_achievement(raw) for raw in stats.get("achievements", [])]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise self._decode_failure(e, PLAYER_ACHIEVEMENTS_PATH, "fetch_achievements") from e

        log.info("Achievements fetched", app_id=app_id, game_name=game_name, count=len(achievements))
        return game_name, achievements

    async def fetch_global_achievement_rates(self, app_id: int) -> list[GlobalAchievementRate]:
        """Fetch global unlock percentages for a game's achievements."""
        params = {
            "gameid": str(app_id),
            "format": "json",
            "l": "en",
        }
        data = await self._get_json(GLOBAL_ACHIEVEMENTS_PATH, params, "fetch_global_achievement_rates")

        try:
            raw_rates = data["achievementpercentages"].get("achievements", [])
            rates = [
                GlobalAchievementRate(api_name=str(raw["name"]), percent=float(raw["percent"]))
                for raw in raw_rates
            ]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise self._decode_failure(e, GLOBAL_ACHIEVEMENTS_PATH, "fetch_global_achievement_rates") from e

        log.info("Global achievement rates fetched", app_id=app_id, count=len(rates))
        return rates

    async def _get_json(self, path: str, params: dict[str, str], operation: str) -> dict[str, Any]:
        try:
            response = await self.http_client.get(path, params=params)
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise get_error_service().convert(
                e, operation=operation, component="steam_api", context={"url": path}
            ) from e

        if not isinstance(data, dict):
            raise self._decode_failure(
                TypeError(f"expected a JSON object, got {type(data).__name__}"), path, operation
            )
        return data

    @staticmethod
    def _decode_failure(error: Exception, path: str, operation: str) -> AppError:
        return get_error_service().convert(
            error, operation=operation, component="steam_api", context={"url": path}
        )


def _parse_game(raw: dict[str, Any]) -> Game:
    return Game(
        app_id=int(raw["appid"]),
        name=str(raw.get("name", "")),
        last_played=int(raw.get("rtime_last_played", 0)),
        playtime_forever=int(raw.get("playtime_forever", 0)),
        playtime_windows_forever=int(raw.get("playtime_windows_forever", 0)),
        playtime_mac_forever=int(raw.get("playtime_mac_forever", 0)),
        playtime_linux_forever=int(raw.get("playtime_linux_forever", 0)),
        playtime_disconnected=int(raw.get("playtime_disconnected", 0)),
        img_icon_url=str(raw.get("img_icon_url", "")),
    )


def _parse_achievement(raw: dict[str, Any]) -> Achievement:
    return Achievement(
        api_name=str(raw["apiname"]),
        name=str(raw.get("name", "")),
        description=str(raw.get("description", "")),
        achieved=int(raw["achieved"]),
        unlock_time=int(raw.get("unlocktime", 0)),
    )
