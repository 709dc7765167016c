"""Identity-verification flow built on form steps."""

from __future__ import annotations

from idv.steps import CONSENT_FIELD, IDV_FIELD_LABELS, SSN_FIELD, build_idv_steps, summarize_submission

__all__ = ["CONSENT_FIELD", "IDV_FIELD_LABELS", "SSN_FIELD", "build_idv_steps", "summarize_submission"]
