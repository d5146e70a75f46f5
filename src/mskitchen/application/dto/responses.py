from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal

from pydantic import BaseModel, Field


class MoneyResponse(BaseModel):
    amount: Decimal
    currency: str


class MenuItemResponse(BaseModel):
    itemId: str
    menuId: str
    name: str
    price: MoneyResponse
    quantityAvailable: int
    quantitySold: int


class MenuResponse(BaseModel):
    menuId: str
    menuDate: date
    deliveryWindowStart: time
    deliveryWindowEnd: time
    upiPhoneNumber: str
    items: list[MenuItemResponse] = Field(default_factory=list)
    createdAt: datetime | None = None


class MenuSummaryResponse(BaseModel):
    menuId: str
    menuDate: date
    deliveryWindowStart: time
    deliveryWindowEnd: time
    upiPhoneNumber: str
    totalOrders: int
    totalRevenue: Decimal


class MenuListResponse(BaseModel):
    menus: list[MenuSummaryResponse] = Field(default_factory=list)


class SendResultResponse(BaseModel):
    number: str
    success: bool
    messageId: str | None = None
    error: str | None = None


class SendMenuResponse(BaseModel):
    menuId: str
    messagesSent: int
    results: list[SendResultResponse] = Field(default_factory=list)


class OrderLineResponse(BaseModel):
    lineId: str
    itemId: str
    itemName: str
    quantity: int
    unitPrice: MoneyResponse
    subtotal: MoneyResponse


class OrderResponse(BaseModel):
    orderId: str
    menuId: str
    customerId: str
    status: str
    paymentStatus: str
    paymentConfirmedAt: datetime | None = None
    lines: list[OrderLineResponse] = Field(default_factory=list)
    total: MoneyResponse
    createdAt: datetime


class PlacedOrderResponse(OrderResponse):
    notified: bool = False


class OrderListResponse(BaseModel):
    orders: list[OrderResponse] = Field(default_factory=list)


class PendingPaymentResponse(BaseModel):
    orderId: str
    orderValue: MoneyResponse
    menuDate: date
    customerWhatsapp: str
    customerAddress: str
    customerName: str | None = None
    orderItems: str


class PendingPaymentsResponse(BaseModel):
    menuDate: date
    payments: list[PendingPaymentResponse] = Field(default_factory=list)
    totalPending: list[MoneyResponse] = Field(default_factory=list)


class PendingPaymentsNotifiedResponse(BaseModel):
    menuDate: date
    pendingCount: int
    messagesSent: int
    results: list[SendResultResponse] = Field(default_factory=list)


class CustomerResponse(BaseModel):
    customerId: str
    whatsappNumber: str
    address: str
    name: str | None = None
    createdAt: datetime
    updatedAt: datetime


class CustomerSummaryResponse(CustomerResponse):
    totalOrders: int
    totalSpent: list[MoneyResponse] = Field(default_factory=list)


class CustomerListResponse(BaseModel):
    customers: list[CustomerSummaryResponse] = Field(default_factory=list)


class ReviewResponse(BaseModel):
    reviewId: str
    orderId: str
    customerId: str
    menuItemId: str | None = None
    rating: int
    comments: str | None = None
    createdAt: datetime


class ReviewDetailResponse(ReviewResponse):
    customerWhatsapp: str
    customerName: str | None = None
    menuItemName: str | None = None
    orderValue: MoneyResponse


class ReviewListResponse(BaseModel):
    reviews: list[ReviewDetailResponse] = Field(default_factory=list)


class ItemRatingResponse(BaseModel):
    menuItemId: str
    menuItemName: str
    reviewCount: int
    averageRating: Decimal


class ItemRatingsResponse(BaseModel):
    items: list[ItemRatingResponse] = Field(default_factory=list)


class CustomerOrderValueResponse(BaseModel):
    customerId: str
    whatsappNumber: str
    name: str | None = None
    address: str
    totalOrders: int
    totalValue: MoneyResponse


class CustomerOrderValuesResponse(BaseModel):
    startDate: date
    endDate: date
    customers: list[CustomerOrderValueResponse] = Field(default_factory=list)


class ItemOrderCountResponse(BaseModel):
    menuItemId: str
    name: str
    orderCount: int
    totalQuantity: int
    totalRevenue: MoneyResponse


class ItemOrderCountsResponse(BaseModel):
    startDate: date
    endDate: date
    items: list[ItemOrderCountResponse] = Field(default_factory=list)
