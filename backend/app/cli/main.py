import asyncio
from pathlib import Path
from typing import Optional

import typer

from app.config import Settings, configure_logging
from app.domain.errors import WeatherDashboardError
from app.domain.models import NormalizedWeather
from app.domain.scoring import score
from app.infra.city_catalog import CityCatalog
from app.services.dashboard import build_aggregator

app = typer.Typer(help="CLI for the weather comfort dashboard")


@app.command("cities")
def cli_cities(
    file: Optional[Path] = typer.Option(None, help="Path to the cities JSON file"),
):
    settings = Settings.from_env()
    catalog = CityCatalog(file or settings.cities_file)
    try:
        cities = catalog.get_cities()
    except WeatherDashboardError as exc:
        typer.echo(f"Could not load cities: {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo("id\tname\tcountry")
    for city in cities:
        typer.echo(f"{city.id}\t{city.name}\t{city.country_code}")


@app.command("score")
def cli_score(
    temperature: float = typer.Option(..., help="Temperature in Celsius"),
    humidity: int = typer.Option(50, help="Relative humidity %"),
    wind: float = typer.Option(0.0, help="Wind speed in m/s"),
    cloudiness: int = typer.Option(0, help="Cloud cover %"),
    name: str = typer.Option("Custom", help="Label for the reading"),
):
    result = score(
        NormalizedWeather(
            city_id=0,
            city_name=name,
            temperature_c=temperature,
            feels_like_c=temperature,
            humidity_pct=humidity,
            wind_speed_ms=wind,
            cloudiness_pct=cloudiness,
            description="",
        )
    )
    typer.echo(f"score\t{result.score:.2f}")
    typer.echo(f"temperature_penalty\t{result.temperature_penalty:.2f}")
    typer.echo(f"humidity_penalty\t{result.humidity_penalty:.2f}")
    typer.echo(f"wind_penalty\t{result.wind_penalty:.2f}")
    typer.echo(f"cloudiness_penalty\t{result.cloudiness_penalty:.2f}")


@app.command("dashboard")
def cli_dashboard(
    top: int = typer.Option(0, help="Number of cities to show (0 shows all)"),
):
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    aggregator = build_aggregator(settings)
    if aggregator is None:
        typer.echo("OPENWEATHER_API_KEY is not set", err=True)
        raise typer.Exit(code=1)
    try:
        cities = asyncio.run(aggregator.get_dashboard())
    except WeatherDashboardError as exc:
        typer.echo(f"Dashboard failed: {exc}", err=True)
        raise typer.Exit(code=1)
    if not cities:
        typer.echo("No weather data available")
        raise typer.Exit(code=0)
    if top > 0:
        cities = cities[:top]
    typer.echo("rank\tcity\tcomfort\ttemp_c\tdescription")
    for city in cities:
        typer.echo(
            f"{city.rank}\t{city.city_name}\t{city.comfort_index:.2f}\t{city.temperature_c:.1f}\t{city.description}"
        )


if __name__ == "__main__":
    app()
