"""异常类测试"""

from optifine_dl.exceptions import (
    ConfigurationError,
    DownloadError,
    DownloadErrorKind,
    ExtractError,
    ExtractErrorKind,
    FetchError,
    OptifineDlException,
    ResolveError,
    ResolveErrorKind,
)


class TestExceptionHierarchy:
    def test_all_derive_from_base(self):
        errors = [
            FetchError("x"),
            ExtractError("x", kind=ExtractErrorKind.MALFORMED_HEADER),
            ResolveError("x", kind=ResolveErrorKind.HREF_MISSING),
            DownloadError("x", kind=DownloadErrorKind.CREATE_FAILED),
            ConfigurationError("x"),
        ]
        assert all(isinstance(e, OptifineDlException) for e in errors)


class TestExceptionFormatting:
    def test_base_message(self):
        assert str(OptifineDlException("Something failed")) == "Something failed"

    def test_context_appended(self):
        error = OptifineDlException("Something failed", context={"row": 3})
        assert str(error) == "Something failed | Context: row=3"

    def test_fetch_error(self):
        error = FetchError("HTTP 404: Not Found", url="https://optifine.net/x", status_code=404)
        assert str(error) == "HTTP 404: Not Found | URL: https://optifine.net/x | Status: 404"

    def test_missing_fields_are_omitted(self):
        assert str(FetchError("Network error")) == "Network error"

    def test_extract_error_kind(self):
        error = ExtractError(
            "Row matches no remaining version",
            kind=ExtractErrorKind.ASSOCIATION_OVERRUN,
            context={"mirror_url": "adloadx?f=a"},
        )
        assert error.kind is ExtractErrorKind.ASSOCIATION_OVERRUN
        assert "Kind: association_overrun" in str(error)
        assert "mirror_url=adloadx?f=a" in str(error)

    def test_resolve_error(self):
        error = ResolveError("No anchor", kind=ResolveErrorKind.ANCHOR_NOT_FOUND, url="u")
        assert str(error) == "No anchor | Kind: anchor_not_found | URL: u"

    def test_download_error_carries_progress(self):
        error = DownloadError(
            "Interrupted",
            kind=DownloadErrorKind.STREAM_INTERRUPTED,
            file_path="/tmp/a.jar",
            bytes_written=500,
        )
        assert error.bytes_written == 500
        assert "File: /tmp/a.jar" in str(error)

    def test_configuration_error(self):
        error = ConfigurationError("Invalid", config_key="chunk_size", config_value=0)
        assert str(error) == "Invalid | Key: chunk_size | Value: 0"
