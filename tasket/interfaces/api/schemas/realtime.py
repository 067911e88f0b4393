"""Pydantic models for realtime presence queries."""

from __future__ import annotations

from pydantic import BaseModel


class OnlineUserRead(BaseModel):
    id: int
    name: str
    role: str


class RealtimeStatsRead(BaseModel):
    connected_users: int
    open_connections: int


__all__ = ["OnlineUserRead", "RealtimeStatsRead"]
