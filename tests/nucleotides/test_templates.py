"""Tests for the template model, its accessors and the conformation database."""

import pickle
import unittest

import numpy as np
import pytest

from rna_assembly.errors import InvalidVariant
from rna_assembly.nucleotides import (
    BASE_SPECIFIC_ATOMS,
    COMMON_ATOMS,
    TEMPLATE_FAMILIES,
    TEMPLATES,
    BaseKind,
    atom_c1_prime,
    atom_n9,
    atom_p,
    base_kind,
    build_template,
    dgf_base_tfo,
    get_template,
    get_templates,
    p_o3_60_tfo,
    p_o3_180_tfo,
    p_o3_275_tfo,
    rA,
    rAs,
    rC,
    rCs,
    rG,
    rG_prime,
    rU,
    rU_prime,
)


class TestDatabase(unittest.TestCase):
    def test_sizes(self):
        self.assertEqual(len(TEMPLATES), 46)
        for family in (rAs, rCs):
            self.assertEqual(len(family), 10)
        self.assertEqual(sorted(TEMPLATE_FAMILIES), ["rAs", "rCs", "rGs", "rUs"])

    def test_kinds(self):
        self.assertEqual(rA.kind, BaseKind.A)
        self.assertEqual(rC.kind, BaseKind.C)
        self.assertEqual(rG.kind, BaseKind.G)
        self.assertEqual(rU.kind, BaseKind.U)
        self.assertEqual(rG_prime.kind, BaseKind.G)
        self.assertEqual(rU_prime.kind, BaseKind.U)
        for family, kind in (("rAs", BaseKind.A), ("rCs", BaseKind.C), ("rGs", BaseKind.G), ("rUs", BaseKind.U)):
            self.assertTrue(all(t.kind == kind for t in TEMPLATE_FAMILIES[family]))

    def test_atom_counts(self):
        expected = {"A": 33, "C": 31, "G": 34, "U": 30}
        for template in TEMPLATES.values():
            self.assertEqual(len(template.atom_names()), expected[template.kind.value], template.name)
            self.assertEqual(template.atom_coords().shape, (expected[template.kind.value], 3))

    def test_known_coordinates(self):
        np.testing.assert_array_equal(atom_p(rA), [2.8930, 8.5380, -3.3280])
        np.testing.assert_array_equal(rA.atom("H8"), [3.4421, 5.5744, -1.5482])
        np.testing.assert_array_equal(rA.dgf_base_tfo.translation, [0.0073, 8.4030, 0.6232])
        np.testing.assert_array_equal(rA.p_o3_275_tfo.rotation[0], [-0.8143, -0.5091, -0.2788])

    def test_standard_frames_are_nearly_orthonormal(self):
        # Stored with four decimals.
        for template in TEMPLATES.values():
            for tfo in (template.dgf_base_tfo,) + template.rotamer_transforms():
                np.testing.assert_allclose(tfo.rotation @ tfo.rotation.T, np.eye(3), atol=2e-3)

    def test_get_template(self):
        self.assertIs(get_template("rC"), rC)
        self.assertIs(get_template("rG'"), rG_prime)
        self.assertIs(get_template("rU_prime"), rU_prime)
        with self.assertRaises(ValueError):
            get_template("rX")

    def test_get_templates_resolves_families(self):
        self.assertEqual(get_templates("rCs"), rCs)
        self.assertEqual(get_templates("rA"), [rA])

    def test_templates_are_read_only(self):
        with self.assertRaises(ValueError):
            rA.coords[0, 0] = 1.0


class TestAccessors(unittest.TestCase):
    def test_common_atoms_available_everywhere(self):
        for template in (rA, rC, rG, rU):
            for name in COMMON_ATOMS:
                self.assertTrue(template.has_atom(name))
                template.atom(name)

    def test_specific_atoms(self):
        np.testing.assert_array_equal(rC.atom("N4"), rC.atom_coords()[len(COMMON_ATOMS)])
        self.assertEqual(rU.atom_names()[-len(BASE_SPECIFIC_ATOMS[BaseKind.U]):], ("O2", "O4", "H3", "H5", "H6"))

    def test_n9_only_on_purines(self):
        atom_n9(rA)
        atom_n9(rG)
        for template in (rC, rU):
            with self.assertRaises(InvalidVariant) as ctx:
                atom_n9(template)
            self.assertEqual(ctx.exception.field, "N9")
            self.assertEqual(ctx.exception.template_name, template.name)

    def test_mismatched_atom_raises_invalid_variant(self):
        with self.assertRaises(InvalidVariant):
            rU.atom("N6")
        with self.assertRaises(LookupError):
            rA.atom("O4")

    def test_rotamer_order(self):
        self.assertEqual(rA.rotamer_transforms(), (rA.p_o3_60_tfo, rA.p_o3_180_tfo, rA.p_o3_275_tfo))

    def test_accessor_returns_local_frame_coordinate(self):
        np.testing.assert_array_equal(atom_c1_prime(rG), rG.atom("C1'"))

    def test_transform_and_kind_accessors(self):
        self.assertIs(dgf_base_tfo(rC), rC.dgf_base_tfo)
        self.assertEqual(
            (p_o3_60_tfo(rU), p_o3_180_tfo(rU), p_o3_275_tfo(rU)), rU.rotamer_transforms()
        )
        self.assertEqual([base_kind(t) for t in (rA, rC, rG_prime, rU_prime)], list("ACGU"))


def test_library_template_pickles_to_shared_instance():
    assert pickle.loads(pickle.dumps(rCs[3])) is rCs[3]


def test_custom_template_pickles_by_value():
    t = build_template("custom", "U", rU.dgf_base_tfo.components(), rU.p_o3_275_tfo.components(),
                       rU.p_o3_180_tfo.components(), rU.p_o3_60_tfo.components(), rU.coords)
    clone = pickle.loads(pickle.dumps(t))
    assert clone is not t
    assert clone.name == "custom"
    np.testing.assert_array_equal(clone.coords, t.coords)


def test_build_template_checks_atom_count():
    with pytest.raises(ValueError):
        build_template("short", "A", rA.dgf_base_tfo.components(), rA.p_o3_275_tfo.components(),
                       rA.p_o3_180_tfo.components(), rA.p_o3_60_tfo.components(), rA.coords[:10])
