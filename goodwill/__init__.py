"""Goodwill API"""
