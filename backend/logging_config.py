#!/usr/bin/env python3
"""
Logging setup for the IP tracker
"""
import logging
import sys


def setup_logging(level=logging.INFO):
    """Configure root logger for the application"""
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
        stream=sys.stdout,
    )

    # Outbound geolocation calls are noisy at INFO
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('requests').setLevel(logging.WARNING)
