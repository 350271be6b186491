"""Resolve two weeks of weather for a single point."""

import asyncio
from datetime import date, timedelta

from weatherscore import (
    InMemoryWeatherCache,
    OpenMeteoForecastSource,
    OpenMeteoHistoricalSource,
    ResolutionOrchestrator,
)


async def main() -> None:
    start = date.today() + timedelta(days=10)
    end = start + timedelta(days=13)

    async with OpenMeteoForecastSource() as forecast, OpenMeteoHistoricalSource() as archive:
        orchestrator = ResolutionOrchestrator(InMemoryWeatherCache(), forecast, archive)
        resolved = await orchestrator.resolve("denver", 39.74, -104.99, start, end)

    # Days past the forecast horizon come from prior-year averages
    print(f"=== Denver {start} .. {end} ({resolved.provenance.value if resolved.provenance else 'no data'}) ===")
    for day in resolved.records:
        print(
            f"  {day.date}: {day.temp_low}-{day.temp_high}°F, "
            f"{day.humidity}% RH, wind {day.wind_speed} mph, "
            f"{day.precip_chance}% {day.precip_type.value}"
        )


if __name__ == "__main__":
    asyncio.run(main())
