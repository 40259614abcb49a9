"""Tests for API endpoints."""

from unittest.mock import AsyncMock, Mock

from fastapi.testclient import TestClient

from app.config import settings
from app.core.exceptions import APIClientError, DocumentAnalysisError, ValidationError
from app.dependencies import get_chat_service, get_document_service, get_tariff_query_service
from app.main import app
from app.schemas.documents import DocumentStatus
from app.schemas.tariffs import (
    HotelSearchItem,
    PropertySummary,
    RatePlanSummary,
    RoomTypeSummary,
    SeasonSummary,
    TariffDetail,
    VendorSummary,
)

PDF = "application/pdf"


def _tariff_detail() -> TariffDetail:
    return TariffDetail(
        id=5,
        base_rate=12500.0,
        tax_percent=18.0,
        service_fee=1000.0,
        currency="INR",
        property=PropertySummary(id=1, name="Grand Luxury Hotel", city="Mumbai", category="5-star"),
        vendor=VendorSummary(id=1, name="Luxury Travels Ltd"),
        season=SeasonSummary(id=1, name="Peak", start_date="2023-10-01", end_date="2024-03-31"),
        room_type=RoomTypeSummary(id=1, name="Standard Room"),
        rate_plan=RatePlanSummary(id=1, name="Breakfast & Dinner Plan", meal_plan="Breakfast & Dinner"),
        attributes={"documentId": 9},
    )


class TestRootEndpoints:
    """Test suite for service metadata endpoints."""

    def test_root_describes_service(self, test_client: TestClient) -> None:
        response = test_client.get("/")

        assert response.status_code == 200
        body = response.json()
        assert body["version"] == settings.app_version
        assert body["documentIntelligenceMode"] == "mock"
        assert body["chatEnabled"] is False
        assert body["endpoints"]["analyze"] == "/api/v1/documents/analyze"

    def test_health(self, test_client: TestClient) -> None:
        response = test_client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json()["service"] == settings.app_name


class TestDocumentEndpoints:
    """Test suite for document upload and status endpoints."""

    def test_analyze_success(self, test_client: TestClient, sample_pdf_content: bytes) -> None:
        mock_service = Mock()
        mock_service.analyze_upload = AsyncMock(
            return_value={
                "success": True,
                "tariff": {"hotelName": "Grand Luxury Hotel"},
                "extractionMethod": "structured_model",
                "processingDetails": {"extractionSuccess": True},
            }
        )
        app.dependency_overrides[get_document_service] = lambda: mock_service

        response = test_client.post(
            "/api/v1/documents/analyze",
            files={"file": ("rates.pdf", sample_pdf_content, PDF)},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["status"] is True
        assert body["message"] == "Hotel tariff extracted successfully"
        assert body["data"]["tariff"]["hotelName"] == "Grand Luxury Hotel"
        mock_service.analyze_upload.assert_awaited_once_with(
            filename="rates.pdf", content_type=PDF, content=sample_pdf_content
        )

    def test_analyze_without_file(self, test_client: TestClient) -> None:
        app.dependency_overrides[get_document_service] = lambda: Mock()

        response = test_client.post("/api/v1/documents/analyze")

        assert response.status_code == 400
        assert response.json()["detail"]["detail"] == "No file provided"

    def test_analyze_invalid_type(self, test_client: TestClient) -> None:
        mock_service = Mock()
        mock_service.analyze_upload = AsyncMock(
            side_effect=ValidationError("Invalid file type. Only PDF, JPG, PNG, and DOCX files are supported.")
        )
        app.dependency_overrides[get_document_service] = lambda: mock_service

        response = test_client.post(
            "/api/v1/documents/analyze",
            files={"file": ("notes.txt", b"hello", "text/plain")},
        )

        assert response.status_code == 400
        assert response.json()["detail"]["detail"].startswith("Invalid file type")

    def test_analyze_analyzer_failure(self, test_client: TestClient, sample_pdf_content: bytes) -> None:
        mock_service = Mock()
        mock_service.analyze_upload = AsyncMock(side_effect=DocumentAnalysisError("service down"))
        app.dependency_overrides[get_document_service] = lambda: mock_service

        response = test_client.post(
            "/api/v1/documents/analyze",
            files={"file": ("rates.pdf", sample_pdf_content, PDF)},
        )

        assert response.status_code == 502
        assert response.json()["detail"]["title"] == "Document Analysis Failed"

    def test_get_document(self, test_client: TestClient) -> None:
        mock_service = Mock()
        mock_service.get_document = AsyncMock(
            return_value=DocumentStatus(
                document_id=3,
                blob_url="local://demo-tenant/x_rates.pdf",
                document_type="hotel-tariff",
                tenant_id="demo-tenant",
                processing_status="completed",
            )
        )
        app.dependency_overrides[get_document_service] = lambda: mock_service

        response = test_client.get("/api/v1/documents/3")

        assert response.status_code == 200
        assert response.json()["data"]["processingStatus"] == "completed"

    def test_get_missing_document(self, test_client: TestClient) -> None:
        mock_service = Mock()
        mock_service.get_document = AsyncMock(return_value=None)
        app.dependency_overrides[get_document_service] = lambda: mock_service

        response = test_client.get("/api/v1/documents/99")

        assert response.status_code == 404


class TestTariffEndpoints:
    """Test suite for tariff detail and hotel search endpoints."""

    def test_get_tariff(self, test_client: TestClient) -> None:
        mock_service = Mock()
        mock_service.get_tariff_detail = AsyncMock(return_value=_tariff_detail())
        app.dependency_overrides[get_tariff_query_service] = lambda: mock_service

        response = test_client.get("/api/v1/tariffs/5")

        assert response.status_code == 200
        tariff = response.json()["data"]["tariff"]
        assert tariff["baseRate"] == 12500.0
        assert tariff["property"]["name"] == "Grand Luxury Hotel"
        assert tariff["season"]["startDate"] == "2023-10-01"
        assert tariff["ratePlan"]["mealPlan"] == "Breakfast & Dinner"
        assert tariff["attributes"] == {"documentId": 9}
        mock_service.get_tariff_detail.assert_awaited_once_with(5)

    def test_get_tariff_invalid_id(self, test_client: TestClient) -> None:
        app.dependency_overrides[get_tariff_query_service] = lambda: Mock()

        response = test_client.get("/api/v1/tariffs/abc")

        assert response.status_code == 400
        assert response.json()["detail"]["detail"] == "Invalid tariff ID"

    def test_get_tariff_not_found(self, test_client: TestClient) -> None:
        mock_service = Mock()
        mock_service.get_tariff_detail = AsyncMock(return_value=None)
        app.dependency_overrides[get_tariff_query_service] = lambda: mock_service

        response = test_client.get("/api/v1/tariffs/404")

        assert response.status_code == 404
        assert response.json()["detail"]["detail"] == "Tariff not found"

    def test_search_hotels(self, test_client: TestClient) -> None:
        item = HotelSearchItem(
            tariff_id=5,
            hotel_name="Grand Luxury Hotel",
            city="Mumbai",
            category="5-star",
            vendor="Luxury Travels Ltd",
            base_rate=12500.0,
            gst_percent=18.0,
            service_fee=1000.0,
            meal_plan="Breakfast & Dinner",
            season="Peak",
            total_rate=15750.0,
        )
        mock_service = Mock()
        mock_service.search_hotels = AsyncMock(return_value=[item])
        app.dependency_overrides[get_tariff_query_service] = lambda: mock_service

        response = test_client.get(
            "/api/v1/hotels/search",
            params={"city": "Mumbai", "sortBy": "totalRate", "sortOrder": "desc"},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["count"] == 1
        assert data["hotels"][0]["hotelName"] == "Grand Luxury Hotel"
        assert data["hotels"][0]["totalRate"] == 15750.0
        mock_service.search_hotels.assert_awaited_once_with(
            city="Mumbai", category=None, sort_by="totalRate", sort_order="desc", limit=10
        )


class TestChatEndpoint:
    """Test suite for the chat endpoint."""

    def test_chat_success(self, test_client: TestClient) -> None:
        mock_service = Mock()
        mock_service.respond = AsyncMock(return_value={"role": "assistant", "content": "Try Goa Sands."})
        app.dependency_overrides[get_chat_service] = lambda: mock_service

        response = test_client.post(
            "/api/v1/chat",
            json={"messages": [{"role": "user", "content": "Cheapest hotel in Goa?"}]},
        )

        assert response.status_code == 200
        assert response.json() == {"role": "assistant", "content": "Try Goa Sands."}
        mock_service.respond.assert_awaited_once_with([{"role": "user", "content": "Cheapest hotel in Goa?"}])

    def test_chat_rejects_empty_messages(self, test_client: TestClient) -> None:
        app.dependency_overrides[get_chat_service] = lambda: Mock()

        empty = test_client.post("/api/v1/chat", json={"messages": []})
        missing = test_client.post("/api/v1/chat", json={"prompt": "hi"})
        not_json = test_client.post("/api/v1/chat", content=b"hello", headers={"Content-Type": "application/json"})

        assert empty.status_code == 400
        assert missing.status_code == 400
        assert not_json.status_code == 400
        assert empty.json()["detail"]["detail"] == "Invalid or empty messages array"

    def test_chat_model_failure(self, test_client: TestClient) -> None:
        mock_service = Mock()
        mock_service.respond = AsyncMock(side_effect=APIClientError("upstream 500"))
        app.dependency_overrides[get_chat_service] = lambda: mock_service

        response = test_client.post("/api/v1/chat", json={"messages": [{"role": "user", "content": "Hi"}]})

        assert response.status_code == 502

    def test_chat_without_openai_settings(self, test_client: TestClient) -> None:
        response = test_client.post("/api/v1/chat", json={"messages": [{"role": "user", "content": "Hi"}]})

        assert response.status_code == 500
        detail = response.json()["detail"]
        assert detail["isConfigError"] is True
        assert "OPENAI_ENDPOINT" in detail["content"]
