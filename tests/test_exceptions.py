"""Tests for custom exception hierarchy."""

from propscore.exceptions import (
    ConfigurationError,
    DataSourceError,
    EntityNotFoundError,
    InvalidAnalysisStateError,
    PropScoreError,
    SinkError,
)


class TestExceptionHierarchy:
    """Test exception inheritance chain."""

    def test_propscore_error_is_exception(self) -> None:
        assert isinstance(PropScoreError("test"), Exception)

    def test_configuration_error_is_propscore_error(self) -> None:
        assert isinstance(ConfigurationError("test"), PropScoreError)

    def test_entity_not_found_is_propscore_error(self) -> None:
        assert isinstance(EntityNotFoundError("test"), PropScoreError)

    def test_invalid_analysis_state_is_propscore_error(self) -> None:
        assert isinstance(InvalidAnalysisStateError("test"), PropScoreError)

    def test_data_source_error_is_propscore_error(self) -> None:
        assert isinstance(DataSourceError("test"), PropScoreError)

    def test_sink_error_is_propscore_error(self) -> None:
        assert isinstance(SinkError("test"), PropScoreError)

    def test_exception_message(self) -> None:
        err = EntityNotFoundError("Analysis a-001 not found")
        assert str(err) == "Analysis a-001 not found"
