"""Tests for Kubernetes event utilities."""

from __future__ import annotations

from unittest.mock import patch

from patterns_operator.utils.events import (
    emit_event,
    emit_finalized,
    emit_reconcile_failed,
    emit_reconcile_started,
    emit_step_completed,
)

BODY = {
    "apiVersion": "gitops.hybrid-cloud-patterns.io/v1alpha1",
    "kind": "Pattern",
    "metadata": {"name": "multicloud-gitops", "namespace": "patterns"},
}


class TestEmitEvent:
    """Test cases for emit_event function."""

    @patch("patterns_operator.utils.events.kopf.event")
    def test_emit_event_normal(self, mock_event):
        """Test emitting normal event."""
        emit_event(BODY, "TestReason", "Test message")

        mock_event.assert_called_once_with(
            BODY,
            reason="TestReason",
            message="Test message",
            type="Normal",
        )

    @patch("patterns_operator.utils.events.kopf.event")
    def test_emit_event_warning(self, mock_event):
        """Test emitting warning event."""
        emit_event(BODY, "ErrorReason", "Error occurred", type_="Warning")

        mock_event.assert_called_once_with(
            BODY,
            reason="ErrorReason",
            message="Error occurred",
            type="Warning",
        )


class TestReconcileEvents:
    """Test cases for reconciliation events."""

    @patch("patterns_operator.utils.events.kopf.event")
    def test_emit_reconcile_started(self, mock_event):
        emit_reconcile_started(BODY)

        call_kwargs = mock_event.call_args[1]
        assert call_kwargs["reason"] == "ReconcileStarted"
        assert call_kwargs["type"] == "Normal"

    @patch("patterns_operator.utils.events.kopf.event")
    def test_emit_reconcile_failed(self, mock_event):
        """Test failures are posted as warnings with the given message."""
        emit_reconcile_failed(BODY, "waiting for creation")

        call_kwargs = mock_event.call_args[1]
        assert call_kwargs["reason"] == "ReconcileFailed"
        assert call_kwargs["message"] == "waiting for creation"
        assert call_kwargs["type"] == "Warning"

    @patch("patterns_operator.utils.events.kopf.event")
    def test_emit_step_completed(self, mock_event):
        emit_step_completed(BODY, "create application")

        call_kwargs = mock_event.call_args[1]
        assert call_kwargs["reason"] == "StepCompleted"
        assert call_kwargs["message"] == "Reconcile step 'create application' complete"

    @patch("patterns_operator.utils.events.kopf.event")
    def test_emit_finalized(self, mock_event):
        emit_finalized(BODY)

        assert mock_event.call_args[1]["reason"] == "Finalized"
