"""Tests for field classification and type resolution."""

import pytest

from k8s_api_docgen.fields import (
    FieldKind,
    classify_field,
    field_names,
    field_required,
    field_type,
    is_inlined,
)
from k8s_api_docgen.models import (
    ArrayType,
    Constructor,
    Ident,
    MapType,
    OpaqueType,
    Pointer,
    Qualified,
    RawField,
    StructType,
    TypeInfo,
)


class TestFieldType:
    def test_identifier(self):
        assert field_type(Ident("string")) == TypeInfo("string", "string", Constructor.NONE, True)

    def test_pointer_to_slice(self):
        info = field_type(Pointer(ArrayType(Ident("Foo"))))

        assert info.name == "*[]Foo"
        assert info.base_type == "Foo"
        assert info.internal
        assert info.constructor == Constructor.POINTER

    def test_slice_of_pointers(self):
        info = field_type(ArrayType(Pointer(Ident("Foo"))))

        assert info.name == "[]*Foo"
        assert info.constructor == Constructor.SLICE

    def test_qualified_is_external(self):
        info = field_type(Qualified("metav1", "ObjectMeta"))

        assert info == TypeInfo(
            "metav1.ObjectMeta", "metav1.ObjectMeta", Constructor.NONE, False
        )

    def test_pointer_to_qualified_is_external(self):
        info = field_type(Pointer(Qualified("corev1", "PodSpec")))

        assert info.name == "*corev1.PodSpec"
        assert not info.internal

    def test_map_uses_value_type(self):
        info = field_type(MapType(Ident("string"), Pointer(Qualified("corev1", "Secret"))))

        assert info.name == "map[string]*corev1.Secret"
        assert info.base_type == "corev1.Secret"
        assert info.constructor == Constructor.MAP
        assert not info.internal

    def test_fixed_array(self):
        assert field_type(ArrayType(Ident("byte"), length="32")).name == "[]byte"

    @pytest.mark.parametrize(
        "expr", [OpaqueType("func()"), OpaqueType("interface{}"), StructType()]
    )
    def test_unrecognized_shapes_are_empty(self, expr):
        assert field_type(expr) == TypeInfo()

    def test_unrecognized_element(self):
        info = field_type(ArrayType(OpaqueType("chan int")))

        assert info.name == "[]"
        assert info.base_type == ""
        assert not info.internal


class TestTagDrivenProperties:
    def test_required_without_tag(self):
        assert field_required(RawField(names=("Name",), type=Ident("string")))

    def test_required_without_omitempty(self):
        field = RawField(names=("Name",), type=Ident("string"), tag='json:"name"')

        assert field_required(field)

    def test_omitempty_is_optional(self):
        field = RawField(names=("Size",), type=Ident("int"), tag='json:"size,omitempty"')

        assert not field_required(field)

    def test_tag_without_json_key(self):
        field = RawField(names=("Size",), type=Ident("int"), tag='yaml:"size,omitempty"')

        assert field_required(field)
        assert field_names(field) == ["Size"]

    def test_malformed_tag_falls_back(self):
        field = RawField(names=("Size",), type=Ident("int"), tag="json:size,omitempty")

        assert field_required(field)
        assert field_names(field) == ["Size"]

    def test_malformed_after_json_entry_keeps_it(self):
        field = RawField(
            names=("Size",), type=Ident("int"), tag='json:"size,omitempty" broken'
        )

        assert not field_required(field)
        assert field_names(field) == ["size"]

    def test_inline_option(self):
        field = RawField(names=(), type=Ident("Base"), tag='json:",inline"')

        assert is_inlined(field)

    def test_inline_must_be_an_option(self):
        field = RawField(names=("Inline",), type=Ident("string"), tag='json:"inline"')

        assert not is_inlined(field)

    def test_embedded_name_is_type_name(self):
        field = RawField(names=(), type=Pointer(Qualified("corev1", "PodSpec")))

        assert field_names(field) == ["PodSpec"]

    def test_embedded_generic_name(self):
        field = RawField(names=(), type=OpaqueType("util.List[int]"))

        assert field_names(field) == ["List"]


class TestClassifyField:
    def test_documented(self):
        field = RawField(
            names=("Name",),
            type=Ident("string"),
            tag='json:"name"',
            doc="Name of the cluster\n+optional\n",
        )

        result = classify_field(field)

        assert result.kind == FieldKind.DOCUMENTED
        (documented,) = result.fields
        assert documented.name == "name"
        assert documented.doc == "Name of the cluster"
        assert documented.mandatory
        assert documented.type == TypeInfo("string", "string", Constructor.NONE, True)

    def test_excluded(self):
        field = RawField(names=("Secret",), type=Ident("string"), tag='json:"-"', doc="Hidden")

        assert classify_field(field).kind == FieldKind.EXCLUDED

    def test_inline(self):
        field = RawField(names=(), type=Qualified("metav1", "TypeMeta"), tag='json:",inline"')

        result = classify_field(field)

        assert result.kind == FieldKind.INLINE
        assert result.type.base_type == "metav1.TypeMeta"
        assert not result.type.internal
        assert result.fields == ()

    def test_several_names(self):
        field = RawField(names=("Min", "Max"), type=Ident("int"))

        result = classify_field(field)

        assert [f.name for f in result.fields] == ["Min", "Max"]

    def test_unexported_field(self):
        field = RawField(names=("cache",), type=Ident("string"), tag='json:"cache"')

        assert classify_field(field).kind == FieldKind.EXCLUDED
        assert classify_field(field, exported_only=False).fields[0].name == "cache"

    def test_unrecognized_type_keeps_field(self):
        field = RawField(names=("Hook",), type=OpaqueType("func()"), tag='json:"hook"')

        result = classify_field(field)

        assert result.kind == FieldKind.DOCUMENTED
        assert result.fields[0].type == TypeInfo()
