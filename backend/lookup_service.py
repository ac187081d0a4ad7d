#!/usr/bin/env python3
"""
Lookup Service - Classify, geolocate and record visitor IP addresses
"""
import logging
import random
from dataclasses import dataclass, field

from sqlalchemy.exc import SQLAlchemyError

from history_store import HISTORY_LIMIT
from ip_utils import is_private_ip, resolve_client_ip

logger = logging.getLogger(__name__)

PRIVATE_COUNTRY = 'Private IP Address'
NOT_AVAILABLE = 'Not Available'
PRIVATE_NOTE = 'This is a private IP address used inside local networks.'

VISIT_ERROR_MESSAGE = 'Could not fetch location details for your IP address. Please try again later.'

# Well-known public addresses used by test mode
TEST_IPS = ('8.8.8.8', '1.1.1.1', '208.80.154.224', '142.250.72.14', '151.101.1.69')


@dataclass
class VisitResult:
    """What the home page renders"""
    ip: str
    visitor_data: dict = None
    history: list = field(default_factory=list)
    error: str = None


class LookupService:
    """Orchestrates IP lookups and the history they leave behind"""

    def __init__(self, geoip_service, history_store):
        self.geoip_service = geoip_service
        self.history_store = history_store

    @staticmethod
    def private_placeholder(ip):
        """Visitor data shown for private addresses"""
        return {
            'query': ip,
            'country': PRIVATE_COUNTRY,
            'city': NOT_AVAILABLE,
            'isp': NOT_AVAILABLE,
            'note': PRIVATE_NOTE,
        }

    def lookup(self, ip):
        """Classify and geolocate an IP, recording successful public lookups.

        Returns ``(data, error)`` like GeoIPService.lookup.
        """
        if is_private_ip(ip):
            return self.private_placeholder(ip), None

        data, err = self.geoip_service.lookup(ip)
        if err:
            return None, err

        if data.get('status') == 'success':
            self.record_lookup(data, ip)
        else:
            logger.info('Provider returned status=%s for %s, not recording',
                        data.get('status'), ip)
        return data, None

    def record_lookup(self, data, requested_ip=None):
        """Insert a history record unless this IP is already stored"""
        ip = data.get('query') or requested_ip
        if not ip:
            return None

        try:
            if self.history_store.find_by_ip(ip) is not None:
                return None
            record = self.history_store.insert(
                ip=ip,
                country=data.get('country'),
                city=data.get('city'),
                isp=data.get('isp'),
            )
        except SQLAlchemyError as e:
            logger.error('Failed to record lookup for %s: %s', ip, e)
            return None

        logger.info('Recorded lookup for %s', ip)
        return record

    def recent_history(self, limit=HISTORY_LIMIT):
        try:
            return self.history_store.list_recent(limit)
        except SQLAlchemyError as e:
            logger.error('Failed to read lookup history: %s', e)
            return []

    def visit(self, forwarded_for, remote_addr):
        """Home page lookup for the calling client"""
        ip = resolve_client_ip(forwarded_for, remote_addr)
        data, err = self.lookup(ip)
        if err:
            logger.error('Error fetching visitor IP info for %s: %s', ip, err)
            return VisitResult(ip=ip, error=VISIT_ERROR_MESSAGE)

        return VisitResult(ip=ip, visitor_data=data, history=self.recent_history())

    def track(self, ip):
        """Manual lookup of a submitted IP"""
        return self.lookup(ip.strip())

    def test_lookup(self):
        """Lookup of a random well-known public IP"""
        ip = random.choice(TEST_IPS)
        data, err = self.lookup(ip)
        if data is not None and not data.get('query'):
            data['query'] = ip
        return data, err

    def delete_history(self, ip):
        try:
            deleted = self.history_store.delete_by_ip(ip)
        except SQLAlchemyError as e:
            logger.error('Error deleting IP %s: %s', ip, e)
            return 0

        logger.info('Deleted %d record(s) for IP %s', deleted, ip)
        return deleted

    def clear_history(self):
        try:
            deleted = self.history_store.delete_all()
        except SQLAlchemyError as e:
            logger.error('Error clearing history: %s', e)
            return 0

        logger.info('Cleared history, %d record(s) removed', deleted)
        return deleted
