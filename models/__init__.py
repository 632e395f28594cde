"""Data models for the Sui Attestation Service"""
