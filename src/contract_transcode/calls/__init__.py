# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Call signature lookup, selector computation and call-data encoding."""

from contract_transcode.calls.resolver import CallSpecResolver, compute_selector, did_you_mean

__all__ = [
    "CallSpecResolver",
    "compute_selector",
    "did_you_mean",
]
