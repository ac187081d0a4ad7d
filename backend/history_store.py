#!/usr/bin/env python3
"""
History Store - Persisted IP lookups
"""
from datetime import datetime, timezone

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

db = SQLAlchemy()

HISTORY_LIMIT = 10


def _utcnow():
    return datetime.now(timezone.utc)


class LookupRecord(db.Model):
    __tablename__ = 'lookup_records'

    id = db.Column(db.Integer, primary_key=True)
    ip = db.Column(db.String(45), nullable=False, index=True)  # IPv4 or IPv6
    country = db.Column(db.String(120))
    city = db.Column(db.String(120))
    isp = db.Column(db.String(255))
    searched_at = db.Column(db.DateTime, default=_utcnow, nullable=False, index=True)

    def to_dict(self):
        return {
            'ip': self.ip,
            'country': self.country,
            'city': self.city,
            'isp': self.isp,
            'searched_at': self.searched_at.isoformat() if self.searched_at else None,
        }

    def __repr__(self):
        return f'<LookupRecord {self.ip}>'


class HistoryStore:
    """Append/read/delete access to lookup history.

    Database errors roll back the session and are re-raised.
    """

    def __init__(self, database):
        self.db = database

    def find_by_ip(self, ip):
        """Get the first record stored for an IP, or None"""
        return self.db.session.execute(
            select(LookupRecord).filter_by(ip=ip).limit(1)
        ).scalar_one_or_none()

    def insert(self, ip, country, city, isp):
        """Store a new lookup record"""
        if not ip:
            raise ValueError('ip is required')

        record = LookupRecord(ip=ip, country=country, city=city, isp=isp)
        try:
            self.db.session.add(record)
            self.db.session.commit()
        except SQLAlchemyError:
            self.db.session.rollback()
            raise
        return record

    def list_recent(self, limit=HISTORY_LIMIT):
        """Most recent records first, never more than HISTORY_LIMIT"""
        limit = max(0, min(limit, HISTORY_LIMIT))
        query = (
            select(LookupRecord)
            .order_by(LookupRecord.searched_at.desc(), LookupRecord.id.desc())
            .limit(limit)
        )
        return list(self.db.session.execute(query).scalars())

    def delete_by_ip(self, ip):
        """Delete every record for an IP, returns the number removed"""
        return self._delete(delete(LookupRecord).where(LookupRecord.ip == ip))

    def delete_all(self):
        """Delete all records, returns the number removed"""
        return self._delete(delete(LookupRecord))

    def _delete(self, statement):
        try:
            result = self.db.session.execute(statement)
            self.db.session.commit()
        except SQLAlchemyError:
            self.db.session.rollback()
            raise
        return result.rowcount
