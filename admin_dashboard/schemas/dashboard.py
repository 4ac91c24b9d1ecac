"""Pydantic schemas for the dashboard overview endpoint."""

from pydantic import BaseModel


class DashboardStats(BaseModel):
    totalUsers: int
    totalDoctors: int
    totalPatients: int
    activeSubscriptions: int
    totalRevenue: float
    monthlyRevenue: float
    todayRevenue: float
    totalAppointments: int
    pendingAppointments: int
    completedAppointments: int
    todayAppointments: int
    pendingWithdrawals: int


class ChartPoint(BaseModel):
    name: str
    value: int


class DashboardStatsResponse(BaseModel):
    stats: DashboardStats
    subscriptionData: list[ChartPoint]
