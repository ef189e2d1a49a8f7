"""Telemetry exporter selection and configuration."""

from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.trace.export import ConsoleSpanExporter

from app.core.config import Settings
from app.shared.telemetry.telemetry import TelemetryConfig, _build_exporter


def test_none_exporter_records_without_shipping() -> None:
    """'none' yields no exporter."""
    assert _build_exporter("none", None) is None


def test_otlp_exporter_with_endpoint() -> None:
    """'otlp' with an endpoint builds the gRPC exporter."""
    assert isinstance(_build_exporter("otlp", "http://localhost:4317"), OTLPSpanExporter)


def test_fallbacks_to_console() -> None:
    """otlp without endpoint and unknown types fall back to the console exporter."""
    assert isinstance(_build_exporter("otlp", None), ConsoleSpanExporter)
    assert isinstance(_build_exporter("jaeger", None), ConsoleSpanExporter)
    assert isinstance(_build_exporter("console", None), ConsoleSpanExporter)


def test_from_settings() -> None:
    """TelemetryConfig picks up service identity and exporter options."""
    settings = Settings(
        _env_file=None,
        telemetry_exporter="otlp",
        telemetry_otlp_endpoint="http://collector:4317",
        telemetry_sample_rate=0.25,
    )
    telemetry = TelemetryConfig.from_settings(settings)
    assert telemetry.service_name == "campus-search"
    assert telemetry.exporter_type == "otlp"
    assert telemetry.otlp_endpoint == "http://collector:4317"
    assert telemetry.sample_rate == 0.25
    assert telemetry.tracer_provider is None
