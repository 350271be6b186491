"""Rank a handful of grid points for a mild, dry long weekend."""

import asyncio
from datetime import date, timedelta

from weatherscore import (
    BatchSearchCoordinator,
    DateRange,
    InMemoryLocationStore,
    Location,
    OpenMeteoForecastSource,
    OpenMeteoHistoricalSource,
    PrecipitationType,
    Region,
    ResolutionOrchestrator,
    SearchOptions,
    SqlWeatherCache,
    WeatherFilters,
    search_locations,
)

GRID = [
    Location(id="den", latitude=39.74, longitude=-104.99, name="Denver", state="CO", region=Region.WEST),
    Location(id="slc", latitude=40.76, longitude=-111.89, name="Salt Lake City", state="UT", region=Region.WEST),
    Location(id="boi", latitude=43.62, longitude=-116.21, name="Boise", state="ID", region=Region.WEST),
    Location(id="pdx", latitude=45.52, longitude=-122.68, name="Portland", state="OR", region=Region.PACIFIC_NORTHWEST),
    Location(id="sea", latitude=47.61, longitude=-122.33, name="Seattle", state="WA", region=Region.PACIFIC_NORTHWEST),
    Location(id="phx", latitude=33.45, longitude=-112.07, name="Phoenix", state="AZ", region=Region.SOUTHWEST),
]


async def main() -> None:
    start = date.today() + timedelta(days=3)
    date_range = DateRange(start, start + timedelta(days=3))
    filters = WeatherFilters(
        temp_min=60,
        temp_max=80,
        humidity_max=70,
        wind_speed_max=15,
        precip_types_excluded=[PrecipitationType.THUNDERSTORMS, PrecipitationType.SNOW],
    )

    cache = SqlWeatherCache("sqlite:///weather_cache.db")
    cache.init()

    async with OpenMeteoForecastSource() as forecast, OpenMeteoHistoricalSource() as archive:
        coordinator = BatchSearchCoordinator(ResolutionOrchestrator(cache, forecast, archive))
        response = await search_locations(
            filters,
            date_range,
            SearchOptions(limit=3),
            store=InMemoryLocationStore(GRID),
            coordinator=coordinator,
        )

    print(f"=== Top {response.total} for {date_range.start} .. {date_range.end} ===")
    for result in response.results:
        b = result.score_breakdown
        print(
            f"  {result.score:3d}  {result.name}, {result.state} [{result.provenance.value}] "
            f"temp={b.temperature} humidity={b.humidity} wind={b.wind} precip={b.precipitation}"
        )
    for warning in response.warnings:
        print(f"  ! {warning}")
    cache.close()


if __name__ == "__main__":
    asyncio.run(main())
