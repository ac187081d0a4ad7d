#!/usr/bin/env python3
"""
IP helpers - private address detection and client address resolution
"""
import re

# Shown instead of loopback so the lookup flow works on a dev machine
DEFAULT_PUBLIC_IP = '8.8.8.8'

MAPPED_IPV4_PREFIX = '::ffff:'

_PRIVATE_172 = re.compile(r'^172\.(1[6-9]|2[0-9]|3[0-1])\.')


def is_private_ip(ip):
    """Check if IP is a private/local address"""
    if not ip:
        return False

    return (
        ip.startswith('10.')
        or ip.startswith('192.168.')
        or _PRIVATE_172.match(ip) is not None
        or ip == '127.0.0.1'
        or ip == '::1'
    )


def _is_loopback(ip):
    return ip == '::1' or ip.startswith('::ffff:127') or ip.startswith('127.')


def resolve_client_ip(forwarded_for, remote_addr):
    """Best-guess originating IP from X-Forwarded-For and the socket address"""
    ip = None
    if forwarded_for:
        ip = forwarded_for.split(',')[0].strip()
    if not ip and remote_addr:
        ip = remote_addr.strip()
    if not ip:
        return DEFAULT_PUBLIC_IP

    if _is_loopback(ip):
        return DEFAULT_PUBLIC_IP

    if ip.startswith(MAPPED_IPV4_PREFIX):
        ip = ip[len(MAPPED_IPV4_PREFIX):]
    return ip or DEFAULT_PUBLIC_IP


def get_client_ip(request):
    """Resolve the client IP of a Flask request"""
    return resolve_client_ip(
        request.headers.get('X-Forwarded-For'),
        request.remote_addr,
    )
