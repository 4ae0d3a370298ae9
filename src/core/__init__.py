"""
Core business logic for video delivery.

This module is framework-agnostic - it doesn't import FastAPI, boto3,
or any infrastructure concerns. The URL service only knows it has a
signer, so it can be tested with a fake.
"""
