"""geosite.dat adapter.

Decodes the V2Ray ``GeoSiteList`` protobuf message. The schema is built
in code from a FileDescriptorProto so no generated ``_pb2`` module is
needed:

    message Domain {
      enum Type { Plain = 0; Regex = 1; Domain = 2; Full = 3; }
      message Attribute {
        string key = 1;
        oneof typed_value { bool bool_value = 2; int64 int_value = 3; }
      }
      Type type = 1;
      string value = 2;
      repeated Attribute attribute = 3;
    }
    message GeoSite { string country_code = 1; repeated Domain domain = 2; }
    message GeoSiteList { repeated GeoSite entry = 1; }
"""

from __future__ import annotations

import logging

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory
from google.protobuf.message import DecodeError

from geomatch.adapters.datasets import InMemoryDomainList
from geomatch.core.errors import DatasetCorrupt, DatasetUnavailable
from geomatch.core.models import DomainRecord, DomainType
from geomatch.core.ports import DatasetHandle

LOGGER = logging.getLogger(__name__)

PACKAGE = "v2ray.core.app.router"

_FIELD = descriptor_pb2.FieldDescriptorProto


def _build_file_descriptor() -> descriptor_pb2.FileDescriptorProto:
    proto = descriptor_pb2.FileDescriptorProto(
        name="geomatch/geosite.proto",
        package=PACKAGE,
        syntax="proto3",
    )

    domain = proto.message_type.add(name="Domain")
    domain_type = domain.enum_type.add(name="Type")
    for name, number in (("Plain", 0), ("Regex", 1), ("Domain", 2), ("Full", 3)):
        domain_type.value.add(name=name, number=number)

    attribute = domain.nested_type.add(name="Attribute")
    attribute.oneof_decl.add(name="typed_value")
    attribute.field.add(name="key", number=1, type=_FIELD.TYPE_STRING, label=_FIELD.LABEL_OPTIONAL)
    attribute.field.add(
        name="bool_value", number=2, type=_FIELD.TYPE_BOOL, label=_FIELD.LABEL_OPTIONAL, oneof_index=0
    )
    attribute.field.add(
        name="int_value", number=3, type=_FIELD.TYPE_INT64, label=_FIELD.LABEL_OPTIONAL, oneof_index=0
    )

    domain.field.add(
        name="type",
        number=1,
        type=_FIELD.TYPE_ENUM,
        type_name=f".{PACKAGE}.Domain.Type",
        label=_FIELD.LABEL_OPTIONAL,
    )
    domain.field.add(name="value", number=2, type=_FIELD.TYPE_STRING, label=_FIELD.LABEL_OPTIONAL)
    domain.field.add(
        name="attribute",
        number=3,
        type=_FIELD.TYPE_MESSAGE,
        type_name=f".{PACKAGE}.Domain.Attribute",
        label=_FIELD.LABEL_REPEATED,
    )

    geosite = proto.message_type.add(name="GeoSite")
    geosite.field.add(name="country_code", number=1, type=_FIELD.TYPE_STRING, label=_FIELD.LABEL_OPTIONAL)
    geosite.field.add(
        name="domain",
        number=2,
        type=_FIELD.TYPE_MESSAGE,
        type_name=f".{PACKAGE}.Domain",
        label=_FIELD.LABEL_REPEATED,
    )

    geosite_list = proto.message_type.add(name="GeoSiteList")
    geosite_list.field.add(
        name="entry",
        number=1,
        type=_FIELD.TYPE_MESSAGE,
        type_name=f".{PACKAGE}.GeoSite",
        label=_FIELD.LABEL_REPEATED,
    )
    return proto


_POOL = descriptor_pool.DescriptorPool()
_POOL.AddSerializedFile(_build_file_descriptor().SerializeToString())

GeoSiteList = message_factory.GetMessageClass(_POOL.FindMessageTypeByName(f"{PACKAGE}.GeoSiteList"))
GeoSite = message_factory.GetMessageClass(_POOL.FindMessageTypeByName(f"{PACKAGE}.GeoSite"))
Domain = message_factory.GetMessageClass(_POOL.FindMessageTypeByName(f"{PACKAGE}.Domain"))


def parse_geosite_list(data: bytes, handle: DatasetHandle = "<bytes>") -> InMemoryDomainList:
    """Decode serialized GeoSiteList bytes into a source."""

    geosite_list = GeoSiteList()
    try:
        geosite_list.ParseFromString(data)
    except DecodeError as exc:
        raise DatasetCorrupt(f"cannot decode dataset {handle}: {exc}", handle) from exc

    entries = []
    for entry in geosite_list.entry:
        records = []
        for domain in entry.domain:
            try:
                domain_type = DomainType(domain.type)
            except ValueError as exc:
                raise DatasetCorrupt(
                    f"unknown domain type {domain.type} in group {entry.country_code} of {handle}", handle
                ) from exc
            attributes = frozenset(attr.key for attr in domain.attribute)
            records.append(DomainRecord(domain_type, domain.value, attributes))
        entries.append((entry.country_code, records))
    return InMemoryDomainList.from_entries(entries)


def load_geosite_dat(handle: DatasetHandle) -> InMemoryDomainList:
    try:
        with open(handle, "rb") as fh:
            data = fh.read()
    except OSError as exc:
        raise DatasetUnavailable(f"cannot read dataset {handle}: {exc}", handle) from exc
    source = parse_geosite_list(data, handle)
    LOGGER.info("Loaded %s groups from %s", len(source), handle)
    return source
