# This file tests map, insights, and dashboard prediction endpoints.
# It exists to protect default bloom dates, batch ordering, failure isolation, and history rules.

from __future__ import annotations

from bloomwatch.ai.flows import NoVegetationDataError
from bloomwatch.ai.llm_client import LlmResponseError
from tests.api.support import (
    TEST_USER,
    FakeFlows,
    FakeHistoryStore,
    api_test_client,
    build_prediction_service,
    sample_prediction,
)

TOKYO = {"city": "Tokyo", "lat": 35.6762, "lon": 139.6503}


def test_city_analysis_returns_both_series_and_logs_analysis() -> None:
    history = FakeHistoryStore()
    service = build_prediction_service(history=history)
    with api_test_client(prediction_service=service, user=TEST_USER) as client:
        response = client.post("/api/v1/map/city/analysis", json=TOKYO)

    assert response.status_code == 200
    payload = response.json()
    assert payload["data"]["location_name"] == "Tokyo"
    assert len(payload["data"]["climate_data"]) == 2
    assert len(payload["data"]["vegetation_data"]) == 2
    assert payload["warnings"] is None
    assert [event.type for _, event in history.logged] == ["ANALYSIS"]


def test_city_analysis_without_vegetation_is_404_and_skips_history() -> None:
    history = FakeHistoryStore()
    service = build_prediction_service(flows=FakeFlows(vegetation=[]), history=history)
    with api_test_client(prediction_service=service, user=TEST_USER) as client:
        response = client.post("/api/v1/map/city/analysis", json=TOKYO)

    assert response.status_code == 404
    payload = response.json()
    assert payload["error_code"] == "NO_VEGETATION_DATA"
    assert payload["message"] == "No vegetation data was found for this location."
    assert history.logged == []


def test_city_analysis_future_start_is_rejected() -> None:
    with api_test_client(prediction_service=build_prediction_service()) as client:
        response = client.post(
            "/api/v1/map/city/analysis", json={**TOKYO, "start_date": "2099-01-01"}
        )

    assert response.status_code == 400
    assert response.json()["error_code"] == "INVALID_DATE_RANGE"


def test_city_prediction_defaults_latest_bloom_to_april_first() -> None:
    flows = FakeFlows()
    service = build_prediction_service(flows=flows)
    with api_test_client(prediction_service=service) as client:
        response = client.post("/api/v1/map/city/prediction", json=TOKYO)

    assert response.status_code == 200
    assert flows.predict_calls[0]["latest_bloom"] == "2025-04-01"
    assert response.json()["data"]["predicted_next_bloom_date"] == "2025-04-02"


def test_city_prediction_keeps_supplied_latest_bloom() -> None:
    flows = FakeFlows()
    with api_test_client(prediction_service=build_prediction_service(flows=flows)) as client:
        client.post("/api/v1/map/city/prediction", json={**TOKYO, "latest_bloom": "2024-03-30"})

    assert flows.predict_calls[0]["latest_bloom"] == "2024-03-30"


def test_city_prediction_logs_predicted_date_for_user() -> None:
    history = FakeHistoryStore()
    service = build_prediction_service(history=history)
    with api_test_client(prediction_service=service, user=TEST_USER) as client:
        client.post("/api/v1/map/city/prediction", json=TOKYO)

    _, event = history.logged[0]
    assert event.type == "PREDICTION"
    assert event.region_name == "Tokyo"
    assert event.predicted_date == "2025-04-02"


def test_city_prediction_without_vegetation_is_404() -> None:
    flows = FakeFlows(error=NoVegetationDataError("No vegetation data found."))
    history = FakeHistoryStore()
    service = build_prediction_service(flows=flows, history=history)
    with api_test_client(prediction_service=service, user=TEST_USER) as client:
        response = client.post("/api/v1/map/city/prediction", json=TOKYO)

    assert response.status_code == 404
    assert response.json()["error_code"] == "NO_VEGETATION_DATA"
    assert history.logged == []


def test_city_prediction_accepts_missing_predicted_date() -> None:
    flows = FakeFlows(prediction=sample_prediction(date_text=None))
    with api_test_client(prediction_service=build_prediction_service(flows=flows)) as client:
        response = client.post("/api/v1/map/city/prediction", json=TOKYO)

    assert response.status_code == 200
    assert response.json()["data"]["predicted_next_bloom_date"] is None


def test_malformed_model_answer_is_upstream_error() -> None:
    flows = FakeFlows(error=LlmResponseError("The model answer was not valid JSON."))
    with api_test_client(prediction_service=build_prediction_service(flows=flows)) as client:
        response = client.post("/api/v1/map/city/prediction", json=TOKYO)

    assert response.status_code == 502
    assert response.json()["error_code"] == "UPSTREAM_ERROR"


def _insights_body(**overrides: object) -> dict[str, object]:
    body: dict[str, object] = {
        "city": "Bangalore",
        "state": "Karnataka",
        "country": "India",
        "vegetation_data": [{"month": "Jan 2024", "value": 5.2, "date": "2024-01-01"}],
    }
    body.update(overrides)
    return body


def test_insights_analysis_logs_full_prediction() -> None:
    history = FakeHistoryStore()
    flows = FakeFlows()
    service = build_prediction_service(flows=flows, history=history)
    with api_test_client(prediction_service=service, user=TEST_USER) as client:
        response = client.post("/api/v1/insights/analysis", json=_insights_body())

    assert response.status_code == 200
    assert response.json()["data"]["potential_species"] == "Cherry blossom"
    assert flows.analysis_inputs[0].location_name == "Bangalore"
    _, event = history.logged[0]
    assert (event.city, event.state, event.country) == ("Bangalore", "Karnataka", "India")
    assert event.prediction is not None
    assert event.prediction.potential_species == "Cherry blossom"


def test_insights_analysis_requires_vegetation_points() -> None:
    flows = FakeFlows()
    with api_test_client(prediction_service=build_prediction_service(flows=flows)) as client:
        response = client.post("/api/v1/insights/analysis", json=_insights_body(vegetation_data=[]))

    assert response.status_code == 422
    assert flows.analysis_inputs == []


def _region(name: str, latest_bloom: str | None = None) -> dict[str, object]:
    region: dict[str, object] = {"name": name, "lat": 10.0, "lon": 20.0}
    if latest_bloom is not None:
        region["latest_bloom"] = latest_bloom
    return region


def test_batch_predictions_keep_request_order_and_isolate_failures() -> None:
    flows = FakeFlows(failing_regions={"Atlantic Ocean"})
    history = FakeHistoryStore()
    service = build_prediction_service(flows=flows, history=history)
    body = {"regions": [_region("Kyoto"), _region("Atlantic Ocean"), _region("Lisse")]}
    with api_test_client(prediction_service=service, user=TEST_USER) as client:
        response = client.post("/api/v1/dashboard/predictions", json=body)

    assert response.status_code == 200
    payload = response.json()
    assert [item["success"] for item in payload["data"]] == [True, False, True]
    assert payload["data"][1]["error"] == "No vegetation data found."
    assert payload["warnings"] == ["Prediction failed for: Atlantic Ocean"]
    assert [event.region_name for _, event in history.logged] == ["Kyoto", "Lisse"]


def test_batch_predictions_default_latest_bloom_to_january_first() -> None:
    flows = FakeFlows()
    service = build_prediction_service(flows=flows)
    body = {"regions": [_region("Kyoto"), _region("Lisse", latest_bloom="2025-04-15")]}
    with api_test_client(prediction_service=service) as client:
        client.post("/api/v1/dashboard/predictions", json=body)

    assert [region.latest_bloom for region in flows.batches[0]] == ["2025-01-01", "2025-04-15"]


def test_batch_predictions_without_user_skip_history() -> None:
    history = FakeHistoryStore()
    service = build_prediction_service(history=history)
    with api_test_client(prediction_service=service) as client:
        response = client.post(
            "/api/v1/dashboard/predictions", json={"regions": [_region("Kyoto")]}
        )

    assert response.status_code == 200
    assert history.logged == []


def test_batch_predictions_reject_oversized_batches() -> None:
    flows = FakeFlows()
    body = {"regions": [_region(f"Region {index}") for index in range(4)]}
    with api_test_client(prediction_service=build_prediction_service(flows=flows)) as client:
        response = client.post("/api/v1/dashboard/predictions", json=body)

    assert response.status_code == 400
    payload = response.json()
    assert payload["error_code"] == "BATCH_TOO_LARGE"
    assert payload["details"] == {"requested": 4}
    assert flows.batches == []


def test_empty_batch_returns_empty_list() -> None:
    with api_test_client(prediction_service=build_prediction_service()) as client:
        response = client.post("/api/v1/dashboard/predictions", json={"regions": []})

    assert response.status_code == 200
    assert response.json()["data"] == []
