"""Utility helpers for cosmkit."""
