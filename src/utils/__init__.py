"""Shared utilities for protoc-gen-go-cache-manager."""
