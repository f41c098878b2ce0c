from __future__ import annotations

from typing import Iterator, Optional

from pydantic import Field

from .base import DescriptionModel


class SpecVersion(DescriptionModel):
    major: int
    minor: int


class SystemVersion(DescriptionModel):
    hw: int = Field(0, alias="HW")
    major: int = Field(0, alias="Major")
    minor: int = Field(0, alias="Minor")
    patch: int = Field(0, alias="Patch")
    buildnumber: int = Field(0, alias="Buildnumber")
    display: str = Field("", alias="Display")


class Icon(DescriptionModel):
    mimetype: str = ""
    width: int = 0
    height: int = 0
    depth: int = 0
    url: str = ""


class IconList(DescriptionModel):
    icon: tuple[Icon, ...] = ()


class Service(DescriptionModel):
    service_type: str = Field(alias="serviceType")
    service_id: str = Field(alias="serviceId")
    control_url: str = Field(alias="controlURL")
    event_sub_url: str = Field(alias="eventSubURL")
    scpd_url: str = Field(alias="SCPDURL")


class ServiceList(DescriptionModel):
    service: tuple[Service, ...] = ()


class Device(DescriptionModel):
    device_type: str = Field(alias="deviceType")
    friendly_name: str = Field(alias="friendlyName")
    manufacturer: str = ""
    manufacturer_url: str = Field("", alias="manufacturerURL")
    model_description: str = Field("", alias="modelDescription")
    model_name: str = Field("", alias="modelName")
    model_number: str = Field("", alias="modelNumber")
    model_url: str = Field("", alias="modelURL")
    udn: str = Field("", alias="UDN")
    upc: str = Field("", alias="UPC")
    icon_list: IconList = Field(default_factory=IconList, alias="iconList")
    service_list: ServiceList = Field(default_factory=ServiceList, alias="serviceList")
    device_list: DeviceList = Field(default_factory=lambda: DeviceList(), alias="deviceList")
    presentation_url: str = Field("", alias="presentationURL")

    @property
    def services(self) -> tuple[Service, ...]:
        return self.service_list.service

    @property
    def devices(self) -> tuple[Device, ...]:
        return self.device_list.device

    def walk(self) -> Iterator[Device]:
        """Yield this device and every nested device, depth first."""
        yield self
        for device in self.devices:
            yield from device.walk()


class DeviceList(DescriptionModel):
    device: tuple[Device, ...] = ()


class RootDescription(DescriptionModel):
    spec_version: SpecVersion = Field(alias="specVersion")
    system_version: Optional[SystemVersion] = Field(None, alias="systemVersion")
    device: Device


Device.model_rebuild()
RootDescription.model_rebuild()
