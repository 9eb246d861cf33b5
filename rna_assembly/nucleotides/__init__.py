"""Nucleotide templates and the reference conformation database."""

from .database import (
    TEMPLATE_FAMILIES,
    TEMPLATES,
    get_template,
    get_templates,
    rA,
    rAs,
    rC,
    rCs,
    rG,
    rG_prime,
    rGs,
    rU,
    rU_prime,
    rUs,
)
from .templates import (
    BASE_SPECIFIC_ATOMS,
    COMMON_ATOMS,
    AtomAccessor,
    BaseKind,
    NucleotideTemplate,
    atom_c1_prime,
    atom_c2,
    atom_c3_prime,
    atom_c4,
    atom_c4_prime,
    atom_n1,
    atom_n9,
    atom_o3_prime,
    atom_p,
    base_kind,
    build_template,
    dgf_base_tfo,
    p_o3_60_tfo,
    p_o3_180_tfo,
    p_o3_275_tfo,
)

__all__ = [
    # Model
    "BaseKind",
    "NucleotideTemplate",
    "AtomAccessor",
    "COMMON_ATOMS",
    "BASE_SPECIFIC_ATOMS",
    "build_template",
    # Accessors
    "atom_p",
    "atom_c1_prime",
    "atom_c2",
    "atom_c3_prime",
    "atom_c4",
    "atom_c4_prime",
    "atom_n1",
    "atom_n9",
    "atom_o3_prime",
    "dgf_base_tfo",
    "p_o3_60_tfo",
    "p_o3_180_tfo",
    "p_o3_275_tfo",
    "base_kind",
    # Database
    "TEMPLATES",
    "TEMPLATE_FAMILIES",
    "get_template",
    "get_templates",
    "rA",
    "rC",
    "rG",
    "rU",
    "rG_prime",
    "rU_prime",
    "rAs",
    "rCs",
    "rGs",
    "rUs",
]
