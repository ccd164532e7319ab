from django.urls import path
from . import views

app_name = "marketing"

urlpatterns = [
    path("", views.home_view, name="home"),
    path("pricing/", views.pricing_view, name="pricing"),
    path("pricing", views.pricing_view),
]
