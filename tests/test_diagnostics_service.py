import services.diagnostics_service as diagnostics_module
from services.diagnostics_service import DiagnosticsService


def test_all_endpoints_report_success_and_failure(fake_api, api_error, monkeypatch):
    monkeypatch.setattr(diagnostics_module, "api_client", fake_api)
    fake_api.respond("GET", "/users/", [{"id": 1}, {"id": 2}])
    fake_api.respond("GET", "/fund-requests/", [])
    fake_api.respond("GET", "/payments/", api_error("Forbidden", 403))

    report = DiagnosticsService.test_all_endpoints()

    assert report["status"] == "complete"
    endpoints = report["endpoints"]
    assert endpoints["GET /api/users/"] == {"status": "success", "count": 2, "sample": {"id": 1}}
    assert endpoints["GET /api/fund-requests/"] == {"status": "success", "count": 0, "sample": None}
    assert endpoints["GET /api/payments/"] == {"status": "failed", "error": "Forbidden"}
