#!/usr/bin/env python3
"""
Sleep Tracker Application.

Records sleep sessions, lets the user rate them, and keeps a history list.
"""

__version__ = "0.1.0"
__author__ = "Sleep Research Team"
__description__ = "Sleep session tracker with background-persisted state holders"
