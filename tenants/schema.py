"""Pydantic schemas for tenant content documents (content/<slug>/data.json).

Section payloads are authored by hand per client, so every section model keeps
unknown keys (``extra="allow"``) and makes its known fields optional. Only
``metadata`` is required; a document without it cannot produce a page title.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Section(BaseModel):
    """Base for tenant-authored sections: permissive, camelCase aliases."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class Metadata(BaseModel):
    model_config = ConfigDict(extra="allow")

    title: str
    description: str = ""
    subdomain: str = ""


class Fonts(Section):
    heading: Optional[str] = None
    body: Optional[str] = None


class Button(Section):
    text: str = ""
    variant: str = "default"
    href: Optional[str] = None


class HeroSection(Section):
    title: str = ""
    subtitle: str = ""
    background_image: Optional[str] = Field(None, alias="backgroundImage")
    buttons: List[Button] = Field(default_factory=list)


class Feature(Section):
    icon: str = ""
    title: str = ""
    description: str = ""


class AboutSection(Section):
    title: str = ""
    paragraphs: List[str] = Field(default_factory=list)
    features: List[Feature] = Field(default_factory=list)


class GalleryItem(Section):
    title: str = ""
    image: str = ""


class GallerySection(Section):
    title: str = ""
    subtitle: str = ""
    items: List[GalleryItem] = Field(default_factory=list)


class InstagramLink(Section):
    handle: str = ""
    url: str = ""


class CallToAction(Section):
    text: str = ""


class BusinessCard(Section):
    """Fields encoded into the scannable contact code."""

    name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    website: str = ""
    instagram: Optional[str] = None


class ContactSection(Section):
    title: str = ""
    subtitle: str = ""
    instagram: Optional[InstagramLink] = None
    cta: Optional[CallToAction] = None
    buttons: List[Button] = Field(default_factory=list)
    business_card: Optional[BusinessCard] = Field(None, alias="businessCard")


class FooterLink(Section):
    text: str = ""
    href: str = ""


class FooterSection(Section):
    text: str = ""
    copyright: str = ""
    links: List[FooterLink] = Field(default_factory=list)


class TenantContent(Section):
    """One client's micro-site: page metadata, sections, and theme colors."""

    metadata: Metadata
    hero: Optional[HeroSection] = None
    about: Optional[AboutSection] = None
    gallery: Optional[GallerySection] = None
    contact: Optional[ContactSection] = None
    footer: Optional[FooterSection] = None
    colors: Dict[str, str] = Field(default_factory=dict)
    fonts: Optional[Fonts] = None
    business_card_data: Optional[BusinessCard] = Field(None, alias="businessCard")

    @property
    def business_card(self):
        """Top-level ``businessCard``, else the one nested under ``contact``."""
        if self.business_card_data is not None:
            return self.business_card_data
        if self.contact is not None:
            return self.contact.business_card
        return None
