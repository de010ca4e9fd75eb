"""
Event system for the twentyone engine.

This package provides the event emitter the round engine reports through.
"""

from twentyone.events.emitter import (
    EventEmitter,
    EventPriority,
    EngineEventType,
)

__all__ = ["EventEmitter", "EventPriority", "EngineEventType"]
