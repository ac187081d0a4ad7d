#!/usr/bin/env python3
"""
GeoIP Service - Get geographic information for IP addresses
Uses ip-api.com free API
"""
import logging

import requests

logger = logging.getLogger(__name__)


class GeoIPService:
    """Service class to get geographic information for IP addresses"""

    FIELDS = 'status,message,query,country,city,isp'

    def __init__(self, api_url='http://ip-api.com/json/', timeout=5):
        self.api_url = api_url
        self.timeout = timeout

    def lookup(self, ip):
        """Look up an IP address.

        Returns a ``(data, error)`` pair. ``data`` is the provider's JSON body
        as a dict, its ``status`` is left for the caller to check.
        """
        try:
            response = requests.get(
                f'{self.api_url}{ip}',
                params={'fields': self.FIELDS},
                timeout=self.timeout
            )
            response.raise_for_status()
            return response.json(), None

        except requests.exceptions.Timeout:
            logger.warning('Geolocation lookup timed out for %s', ip)
            return None, 'timeout'
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.warning('Geolocation lookup failed for %s: %s', ip, e)
            return None, f'lookup_error: {e}'
