"""Helpers shared by routers and services"""
