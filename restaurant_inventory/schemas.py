from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, EmailStr, Field

Category = Literal["meat", "produce", "dairy", "dry-goods", "beverages", "oils"]
Role = Literal["admin", "manager", "staff"]
Department = Literal["management", "kitchen", "service"]


# Auth


class SessionUser(BaseModel):
    id: str
    name: str
    email: str
    role: Role


class RegisterRequest(BaseModel):
    name: str = Field(min_length=2)
    email: EmailStr
    password: str = Field(min_length=8)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class AuthResponse(BaseModel):
    message: str
    user: SessionUser
    access_token: str
    token_type: str = "bearer"


class MeResponse(BaseModel):
    user: SessionUser


class MessageResponse(BaseModel):
    message: str


# Inventory


class InventoryItemCreate(BaseModel):
    name: str = Field(min_length=1)
    category: Category
    currentStock: float = Field(ge=0, allow_inf_nan=False)
    minStock: float = Field(ge=0, allow_inf_nan=False)
    unit: str = Field(min_length=1)


class InventoryItemUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    category: Optional[Category] = None
    currentStock: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    minStock: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    unit: Optional[str] = Field(default=None, min_length=1)
    notes: Optional[str] = None


class InventoryItemRead(BaseModel):
    id: str
    name: str
    category: str
    currentStock: float
    minStock: float
    unit: str
    status: str
    percentRemaining: float
    lastUpdated: datetime
    createdBy: str
    createdByName: str
    ownerId: str
    createdAt: datetime


class InventoryItemResponse(BaseModel):
    item: InventoryItemRead


class InventoryItemListResponse(BaseModel):
    items: List[InventoryItemRead]


class DeleteResponse(BaseModel):
    success: bool


# Activity


class ActivityCreate(BaseModel):
    type: str
    item: str
    quantityValue: Union[float, str]
    notes: Optional[str] = None


class ActivityRead(BaseModel):
    id: str
    type: str
    item: str
    itemName: str
    quantity: str
    timestamp: datetime
    user: str
    userName: str
    notes: str
    stockBefore: Optional[float] = None
    stockAfter: Optional[float] = None


class ActivityResponse(BaseModel):
    activity: ActivityRead
    item: InventoryItemRead


class ActivityListResponse(BaseModel):
    activities: List[ActivityRead]


# Staff


class StaffCreate(BaseModel):
    name: str = Field(min_length=2)
    email: EmailStr
    role: Role
    department: Department
    password: str = Field(min_length=8)


class StaffRead(BaseModel):
    id: str
    name: str
    email: str
    role: str
    department: Optional[str] = None
    status: str
    adminId: Optional[str] = None
    lastActive: datetime


class StaffResponse(BaseModel):
    staff: StaffRead


class StaffListResponse(BaseModel):
    staff: List[StaffRead]


# Dashboard / analytics


class DashboardSummary(BaseModel):
    totalItems: int
    lowStockItems: int
    monthlyUsage: float
    activeStaff: int
    currency: Optional[str] = None
    monthlyUsageFormatted: Optional[str] = None


class OverviewPoint(BaseModel):
    name: str
    usage: float
    stock: float


class OverviewResponse(BaseModel):
    data: List[OverviewPoint]
