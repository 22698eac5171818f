# -*- coding: utf-8 -*-
"""CalTrack — calorie, activity and weight tracking API."""

__version__ = "1.0.0"
