"""REST routers for the Sui Attestation Service"""
