"""
Google Places API client: рейтинг, отзывы и координаты филиала.

Поиск place_id — findplacefromtext, детали — details.
"""
import logging

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


class GooglePlacesError(Exception):
    """Ошибка обращения к Google Places API."""


class GooglePlacesClient:
    """Клиент Google Places. Ключ и таймаут берутся из settings."""

    def __init__(self, api_key=None, base_url=None, timeout=None):
        self.api_key = api_key if api_key is not None else settings.GOOGLE_PLACES_API_KEY
        self.base_url = (base_url or settings.GOOGLE_PLACES_BASE_URL).rstrip('/')
        self.timeout = timeout or settings.GOOGLE_PLACES_TIMEOUT

    @property
    def is_configured(self):
        return bool(self.api_key)

    def _get(self, endpoint, params):
        url = f'{self.base_url}/{endpoint}/json'
        try:
            response = requests.get(url, params={**params, 'key': self.api_key}, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"Google Places request failed: {endpoint}: {e}")
            raise GooglePlacesError(f"Google Places request failed: {e}") from e

    def find_place_id(self, name):
        """place_id по названию в Google Maps или None."""
        data = self._get('findplacefromtext', {
            'input': name,
            'inputtype': 'textquery',
            'fields': 'place_id',
        })
        candidates = data.get('candidates') or []
        if data.get('status') != 'OK' or not candidates:
            logger.info(f"Google Places: no place found for '{name}' (status={data.get('status')})")
            return None
        return candidates[0].get('place_id')

    def get_details(self, place_id):
        """
        Returns:
            dict: {'rating', 'user_ratings_total', 'reviews', 'latitude', 'longitude'} или None
        """
        data = self._get('details', {
            'place_id': place_id,
            'fields': 'rating,user_ratings_total,reviews,geometry',
        })
        if data.get('status') != 'OK':
            logger.info(f"Google Places: details unavailable for {place_id} (status={data.get('status')})")
            return None

        result = data.get('result') or {}
        location = (result.get('geometry') or {}).get('location') or {}
        return {
            'rating': result.get('rating'),
            'user_ratings_total': result.get('user_ratings_total'),
            'reviews': result.get('reviews') or [],
            'latitude': location.get('lat'),
            'longitude': location.get('lng'),
        }

    def fetch_place_information(self, name):
        place_id = self.find_place_id(name)
        if not place_id:
            return None
        details = self.get_details(place_id)
        if details is None:
            return None
        details['place_id'] = place_id
        return details
