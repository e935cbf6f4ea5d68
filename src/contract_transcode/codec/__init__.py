# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Wire codec: compact integers, value encoder and value decoder."""

from contract_transcode.codec.compact import decode_compact, encode_compact
from contract_transcode.codec.cursor import Cursor
from contract_transcode.codec.decoder import decode, decode_value
from contract_transcode.codec.encoder import encode_value

__all__ = [
    "Cursor",
    "decode",
    "decode_compact",
    "decode_value",
    "encode_compact",
    "encode_value",
]
