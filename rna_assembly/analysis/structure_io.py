"""Write assembled structures as PDB or mmCIF files using BioPython."""

import logging
from pathlib import Path
from typing import Sequence, Union

from Bio.PDB import MMCIFIO, PDBIO
from Bio.PDB.Atom import Atom
from Bio.PDB.StructureBuilder import StructureBuilder

from ..placement.variables import Assignment

logger = logging.getLogger(__name__)


def build_structure(assignments: Sequence[Assignment], chain_id: str = "A", structure_id: str = "assembly"):
    """
    Build a Bio.PDB Structure with one model per assignment.

    Residues are numbered by identity and sorted, residue names are the
    base letters.
    """
    if not assignments:
        raise ValueError("build_structure needs at least one assignment")

    builder = StructureBuilder()
    builder.init_structure(structure_id)
    serial = 1
    for model_id, assignment in enumerate(assignments):
        # Written model numbers start at 1.
        builder.init_model(model_id, serial_num=model_id + 1)
        builder.init_chain(chain_id)
        builder.init_seg("    ")
        for var in sorted(assignment, key=lambda v: v.identity):
            builder.init_residue(var.template.kind.value, " ", var.identity, " ")
            coords = var.atom_coords()
            for atom_name, coord in zip(var.template.atom_names(), coords):
                atom = Atom(
                    name=atom_name,
                    coord=coord.astype("f"),
                    bfactor=0.0,
                    occupancy=1.0,
                    altloc=" ",
                    fullname=atom_name,
                    serial_number=serial,
                    element=atom_name[0],
                )
                builder.residue.add(atom)
                serial += 1
    return builder.get_structure()


def save_structure(
    assignments: Union[Assignment, Sequence[Assignment]],
    output_file: Union[str, Path],
    chain_id: str = "A",
) -> Path:
    """Save one or more assignments to ``.pdb`` or ``.cif``.

    Raises:
        ValueError: For an empty input or an unsupported file suffix.
    """
    if isinstance(assignments, Assignment):
        assignments = [assignments]
    output_path = Path(output_file)
    suffix = output_path.suffix.lower()

    io: Union[PDBIO, MMCIFIO]
    if suffix == ".pdb":
        io = PDBIO()
    elif suffix == ".cif":
        io = MMCIFIO()
    else:
        raise ValueError(f"Unsupported output file format: {suffix}. Use .pdb or .cif.")

    structure = build_structure(list(assignments), chain_id=chain_id)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    io.set_structure(structure)
    io.save(str(output_path))
    logger.info("Wrote %d model(s) to %s", len(assignments), output_path)
    return output_path
