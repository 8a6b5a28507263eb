"""User-facing entry points"""
