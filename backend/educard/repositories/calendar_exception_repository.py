"""
Calendar exception repository.
"""

from educard.core.integrations.http.http_client import HttpClient
from educard.repositories.base_repository import BaseRepository
from educard.schemas.calendar_exception import CalendarException

CALENDAR_EXCEPTIONS_ENDPOINT = "/attendance/calendar-exception/"


class CalendarExceptionRepository(BaseRepository[CalendarException]):
    def __init__(self, http_client: HttpClient):
        super().__init__(CalendarException, http_client, CALENDAR_EXCEPTIONS_ENDPOINT)
