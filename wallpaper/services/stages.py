"""Enumerations describing the upload transaction stages."""

from enum import Enum


class IngestStage(str, Enum):
    """Finite states an upload passes through before a response is sent."""

    RECEIVING_BODY = "receiving_body"
    PARSING = "parsing"
    DECODING_HASHING = "decoding_hashing"
    COMMITTING = "committing"
    RESPONDED_SUCCESS = "responded_success"
    RESPONDED_ERROR = "responded_error"
