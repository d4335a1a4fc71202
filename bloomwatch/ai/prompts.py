"""
Prompt templates for the bloom flows.
Each renderer formats the time series as one line per month and ends with the JSON keys
the answer must use, matching the flow's output model.
"""

from __future__ import annotations

from collections.abc import Iterable

from bloomwatch.ai.schemas import BloomAnalysisInput, ChartSummaryInput, PredictionInput
from bloomwatch.sources.models import ClimateDataPoint, VegetationDataPoint, VegetationReading

PREDICTION_TEMPLATE = """You are an expert in botany, agriculture, and climate science. You are skilled at recommending suitable flower species for a given region.

Given the historical vegetation data (insolation as a proxy), recent climate data, and the geographic coordinates for a specific region, perform the following tasks:
1.  Suggest potential flower species that are suitable for this region's climate.
2.  Provide a brief justification for your species suggestions, explaining why they are suitable based on the provided climate data (temperature, rainfall) and vegetation trends.
3.  Describe the ecological significance of this type of bloom in the region.
4.  Explain the potential impact on human activities (e.g., agriculture, economy, tourism).
5.  Estimate the next bloom date for the region, given its latest recorded bloom on {latest_bloom_date}.

Region Name: {region_name}
Coordinates: (Lat: {lat}, Lon: {lon})

Historical Insolation Data (Proxy for Vegetation Health):
{vegetation_lines}

Recent Climate Data (Last 12 Months):
{climate_lines}

Analysis Instructions:
-   potential_species: Based on the region's geography ({lat}, {lon}) and the climate data, list a few flower species suitable for growing in this region.
-   prediction_justification: Explain in detail why the suggested species are suitable. Reference the temperature and rainfall data. For example, "Species X thrives in warm climates with moderate rainfall, which aligns with this region's average temperature of Y°C and annual precipitation of Z mm."
-   ecological_significance: Describe why cultivating these species is important for the local ecosystem. Consider pollinators (bees, butterflies), soil health, and biodiversity.
-   human_impact: Describe the relevance of these flowers for people. Think about agriculture (e.g., ornamental flowers), tourism (e.g., flower festivals), or local economy.
-   predicted_next_bloom_date: The expected start of the next bloom as YYYY-MM-DD.

{response_format}"""

BLOOM_ANALYSIS_TEMPLATE = """You are an expert botanist and data analyst. Your job is to analyze vegetation data for a specific location to determine its peak blooming season and suggest suitable flower species.

Location: {location_name}

Analyze the provided vegetation data below, which uses 'All Sky Insolation' as a proxy for vegetation health.
- Identify the month(s) with the highest insolation values, which corresponds to the peak growing and likely blooming season.
- Based on the location and the peak season, suggest a few flower species that would thrive there.
- Provide a brief justification for your suggestions, explaining how the peak season supports their growth.
- Describe the ecological significance of this type of bloom in the region (e.g., impact on pollinators).
- Explain the potential impact on human activities (e.g., agriculture, tourism).

Vegetation Data (Insolation as a proxy for health):
{vegetation_lines}

{response_format}"""

CHART_SUMMARY_TEMPLATE = """You are a helpful data analyst. Your job is to look at climate and vegetation data and explain it in a very simple, concise, and easy-to-understand way for a non-technical user.

Location: {location_name}

Analyze the provided climate (temperature and rainfall) and vegetation (insolation proxy) data below. Identify the key trends, peaks, and relationships. Then, generate a short summary (2-3 sentences) that explains what the charts are showing.

Focus on simple language. For example, instead of "NDVI values peaked in August", say "The plants were greenest and healthiest in August".

Climate Data:
{climate_lines}

Vegetation Data (Insolation as a proxy for health):
{vegetation_lines}

{response_format}"""

PREDICTION_KEYS = (
    "predicted_next_bloom_date",
    "potential_species",
    "prediction_justification",
    "ecological_significance",
    "human_impact",
)
SUMMARY_KEYS = ("summary",)


def response_format(keys: Iterable[str]) -> str:
    key_list = ", ".join(f'"{key}"' for key in keys)
    return (
        "Respond with a single JSON object and nothing else. "
        f"Use exactly these string keys: {key_list}."
    )


def format_vegetation_lines(
    readings: Iterable[VegetationReading | VegetationDataPoint], *, prefix: str = "  "
) -> str:
    lines = [f"{prefix}{reading.month}: {reading.value}" for reading in readings]
    return "\n".join(lines) or f"{prefix}(no data)"


def format_climate_lines(points: Iterable[ClimateDataPoint], *, prefix: str = "  ") -> str:
    lines = [
        f"{prefix}{point.month}: Temp: {point.temperature}°C, Rainfall: {point.rainfall}mm"
        for point in points
    ]
    return "\n".join(lines) or f"{prefix}(no data)"


def render_prediction_prompt(payload: PredictionInput) -> str:
    return PREDICTION_TEMPLATE.format(
        region_name=payload.region_name,
        lat=payload.lat,
        lon=payload.lon,
        latest_bloom_date=payload.latest_bloom_date,
        vegetation_lines=format_vegetation_lines(payload.ndvi_data),
        climate_lines=format_climate_lines(payload.climate_data),
        response_format=response_format(PREDICTION_KEYS),
    )


def render_bloom_analysis_prompt(payload: BloomAnalysisInput) -> str:
    return BLOOM_ANALYSIS_TEMPLATE.format(
        location_name=payload.location_name,
        vegetation_lines=format_vegetation_lines(payload.vegetation_data, prefix="- "),
        response_format=response_format(PREDICTION_KEYS),
    )


def render_chart_summary_prompt(payload: ChartSummaryInput) -> str:
    return CHART_SUMMARY_TEMPLATE.format(
        location_name=payload.location_name,
        climate_lines=format_climate_lines(payload.climate_data, prefix="- "),
        vegetation_lines=format_vegetation_lines(payload.vegetation_data, prefix="- "),
        response_format=response_format(SUMMARY_KEYS),
    )
