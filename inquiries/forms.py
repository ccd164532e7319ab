"""Validation for the JSON contact and website-request submissions."""
from django import forms

MISSING_FIELDS = "Missing required fields"


class InquiryForm(forms.Form):
    """Base: picks the single error message the API reports."""

    missing_fields_message = MISSING_FIELDS

    def error_message(self):
        errors = self.errors.as_data()
        if any(err.code == "required" for field_errors in errors.values() for err in field_errors):
            return self.missing_fields_message
        if "email" in errors:
            return "Invalid email address"
        for field_errors in errors.values():
            return field_errors[0].messages[0]
        return "Invalid request"


class ContactForm(InquiryForm):
    missing_fields_message = "Missing required fields. Please fill in name, email, and message."

    name = forms.CharField(max_length=200)
    email = forms.EmailField()
    message = forms.CharField(max_length=5000)
    phone = forms.CharField(max_length=50, required=False)
    company = forms.CharField(max_length=200, required=False)


class WebsiteRequestForm(InquiryForm):
    name = forms.CharField(max_length=200)
    email = forms.EmailField()
    pages = forms.CharField(max_length=50)
    seoLevel = forms.CharField(max_length=50)
    deliveryTime = forms.CharField(max_length=50)
    theme = forms.CharField(max_length=50)
    supportLevel = forms.CharField(max_length=50)
    features = forms.JSONField(required=False)
    customFeaturesText = forms.CharField(max_length=5000, required=False)
    message = forms.CharField(max_length=5000, required=False)
    estimatedPrice = forms.IntegerField(required=False)

    def clean_features(self):
        features = self.cleaned_data.get("features")
        if features in (None, ""):
            return {}
        if not isinstance(features, dict):
            raise forms.ValidationError("Features must be an object.")
        return features


class QuoteForm(forms.Form):
    pages = forms.CharField(max_length=50, required=False)
    seoLevel = forms.CharField(max_length=50, required=False)
    deliveryTime = forms.CharField(max_length=50, required=False)
    theme = forms.CharField(max_length=50, required=False)
    supportLevel = forms.CharField(max_length=50, required=False)
    features = forms.JSONField(required=False)
