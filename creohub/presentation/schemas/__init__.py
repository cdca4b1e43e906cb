"""Presentation layer schemas"""
