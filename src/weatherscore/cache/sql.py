"""SQL-backed weather cache using SQLModel."""

from __future__ import annotations

import asyncio
import datetime as dt
import threading
from collections.abc import Sequence

from sqlalchemy import Column, DateTime
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Field, Session, SQLModel, create_engine, select

from weatherscore._dates import DateRange
from weatherscore.cache.base import CacheWrite, newest_per_date
from weatherscore.config import settings
from weatherscore.exceptions import CacheReadFailed, CacheWriteFailed
from weatherscore.models.cache import CacheEntry
from weatherscore.models.weather import DailyWeatherRecord, DataClass


class WeatherCacheRow(SQLModel, table=True):
    """One cached day; the composite primary key enforces a single row per class."""

    __tablename__ = "weather_cache"

    location_id: str = Field(primary_key=True, max_length=64)
    date: dt.date = Field(primary_key=True)
    data_class: str = Field(primary_key=True, max_length=16)
    data: str = Field(description="DailyWeatherRecord as JSON")
    fetched_at: dt.datetime = Field(
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
    )


def _as_utc(value: dt.datetime) -> dt.datetime:
    # SQLite drops tzinfo on the way back out.
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.timezone.utc)
    return value.astimezone(dt.timezone.utc)


def _to_entry(row: WeatherCacheRow) -> CacheEntry:
    return CacheEntry(
        location_id=row.location_id,
        date=row.date,
        data_class=DataClass(row.data_class),
        record=DailyWeatherRecord.model_validate_json(row.data),
        fetched_at=_as_utc(row.fetched_at),
    )


class SqlWeatherCache:
    """Cache store on any SQLAlchemy database.

    Blocking database work runs in a worker thread; write batches are
    serialized and committed as a single transaction.

    Usage:
        cache = SqlWeatherCache("sqlite:///weather_cache.db")
        cache.init()
    """

    def __init__(
        self,
        database_url: str = settings.cache_database_url,
        engine: Engine | None = None,
    ) -> None:
        if engine is None:
            connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
            engine = create_engine(database_url, echo=False, pool_pre_ping=True, connect_args=connect_args)
        self.engine = engine
        self._write_lock = threading.Lock()

    def init(self) -> None:
        """Create the cache table if it does not exist."""
        SQLModel.metadata.create_all(self.engine, tables=[WeatherCacheRow.__table__])

    def _get_sync(self, location_id: str, date_range: DateRange) -> dict[dt.date, CacheEntry]:
        stmt = select(WeatherCacheRow).where(
            WeatherCacheRow.location_id == location_id,
            WeatherCacheRow.date >= date_range.start,
            WeatherCacheRow.date <= date_range.end,
        )
        try:
            with Session(self.engine) as session:
                rows = session.exec(stmt).all()
        except SQLAlchemyError as exc:
            raise CacheReadFailed(f"Failed to read cache for {location_id}: {exc}") from exc
        return newest_per_date([_to_entry(row) for row in rows])

    def _put_sync(
        self, location_id: str, entries: Sequence[CacheWrite], fetched_at: dt.datetime,
    ) -> None:
        with self._write_lock, Session(self.engine) as session:
            try:
                for day, data_class, record in entries:
                    session.merge(
                        WeatherCacheRow(
                            location_id=location_id,
                            date=day,
                            data_class=data_class.value,
                            data=record.model_dump_json(),
                            fetched_at=_as_utc(fetched_at),
                        )
                    )
                session.commit()
            except SQLAlchemyError as exc:
                session.rollback()
                raise CacheWriteFailed(
                    f"Failed to cache {len(entries)} days for {location_id}: {exc}"
                ) from exc

    async def get(self, location_id: str, date_range: DateRange) -> dict[dt.date, CacheEntry]:
        return await asyncio.to_thread(self._get_sync, location_id, date_range)

    async def put(
        self, location_id: str, entries: Sequence[CacheWrite], fetched_at: dt.datetime,
    ) -> None:
        if not entries:
            return
        await asyncio.to_thread(self._put_sync, location_id, entries, fetched_at)

    def close(self) -> None:
        self.engine.dispose()
