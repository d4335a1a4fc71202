"""
Unit tests for prompt rendering.
They check that each prompt carries its data lines and the JSON keys the output model expects.
"""

from __future__ import annotations

from bloomwatch.ai.prompts import (
    PREDICTION_KEYS,
    format_vegetation_lines,
    render_bloom_analysis_prompt,
    render_chart_summary_prompt,
    render_prediction_prompt,
)
from bloomwatch.ai.schemas import BloomAnalysisInput, ChartSummaryInput, PredictionInput
from bloomwatch.sources.models import ClimateDataPoint, VegetationDataPoint, VegetationReading


def test_prediction_prompt_includes_region_series_and_keys() -> None:
    prompt = render_prediction_prompt(
        PredictionInput(
            region_name="Keukenhof, Lisse",
            lat=52.2697,
            lon=4.5462,
            ndvi_data=[VegetationReading(month="Mar 2025", value=3.4)],
            latest_bloom_date="2025-04-15",
            climate_data=[ClimateDataPoint(month="Mar 2025", temperature=8.2, rainfall=1.9)],
        )
    )

    assert "Region Name: Keukenhof, Lisse" in prompt
    assert "latest recorded bloom on 2025-04-15" in prompt
    assert "  Mar 2025: 3.4" in prompt
    assert "Mar 2025: Temp: 8.2°C, Rainfall: 1.9mm" in prompt
    for key in PREDICTION_KEYS:
        assert f'"{key}"' in prompt


def test_bloom_analysis_prompt_uses_dash_lines() -> None:
    prompt = render_bloom_analysis_prompt(
        BloomAnalysisInput(
            location_name="Bangalore",
            vegetation_data=[VegetationDataPoint(month="Jan 2024", value=5.1, date="2024-01-01")],
        )
    )

    assert "Location: Bangalore" in prompt
    assert "- Jan 2024: 5.1" in prompt


def test_chart_summary_prompt_asks_for_summary_key() -> None:
    prompt = render_chart_summary_prompt(
        ChartSummaryInput(location_name="Tokyo", climate_data=[], vegetation_data=[])
    )

    assert '"summary"' in prompt
    assert "- (no data)" in prompt


def test_empty_series_renders_placeholder() -> None:
    assert format_vegetation_lines([]) == "  (no data)"
