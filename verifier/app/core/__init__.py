"""Core constants shared across the verifier modules."""

SERVICE_NAME = "contract-verifier"
