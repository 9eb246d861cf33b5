import numpy as np
import pytest
from Bio.PDB import MMCIFParser, PDBParser
from Bio.PDB.MMCIF2Dict import MMCIF2Dict

from rna_assembly.analysis import build_structure, save_structure
from rna_assembly.nucleotides import rA


def test_build_structure_models_and_residues(anticodon_solutions):
    structure = build_structure(anticodon_solutions[:2], chain_id="B")
    models = list(structure)
    assert len(models) == 2
    residues = list(models[0]["B"])
    assert [r.id[1] for r in residues] == list(range(27, 44))
    assert residues[0].get_resname() == "C"


def test_build_structure_needs_assignments():
    with pytest.raises(ValueError):
        build_structure([])


def test_save_pdb_round_trip(tmp_path, pseudoknot_solutions):
    solution = pseudoknot_solutions[0]
    path = save_structure(solution, tmp_path / "out" / "knot.pdb")
    assert path.exists()

    structure = PDBParser(QUIET=True).get_structure("knot", str(path))
    chain = structure[0]["A"]
    assert len(chain) == 23
    atom = chain[23]["C1'"]
    np.testing.assert_allclose(atom.coord, rA.atom("C1'"), atol=1e-3)
    assert chain[1].get_resname() == "C"
    assert chain[15].get_resname() == "G"
    assert "N9" in chain[15]
    np.testing.assert_allclose(
        chain[15]["N9"].coord, solution[15].atom_position("N9"), atol=1e-3
    )


def test_save_cif(tmp_path, pseudoknot_solutions):
    path = save_structure(pseudoknot_solutions[:2], tmp_path / "knot.cif")
    structure = MMCIFParser(QUIET=True).get_structure("knot", str(path))
    assert len(list(structure.get_models())) == 2
    assert len(list(structure[0].get_residues())) == 23


def test_unsupported_suffix(tmp_path, pseudoknot_solutions):
    with pytest.raises(ValueError):
        save_structure(pseudoknot_solutions[0], tmp_path / "knot.xyz")


def test_atom_elements(tmp_path, pseudoknot_solutions):
    path = save_structure(pseudoknot_solutions[0], tmp_path / "knot.pdb")
    structure = PDBParser(QUIET=True).get_structure("knot", str(path))
    elements = {a.element for a in structure.get_atoms()}
    assert elements == {"C", "H", "N", "O", "P"}


def test_each_solution_becomes_its_own_model(tmp_path, pseudoknot_solutions):
    solutions = pseudoknot_solutions[:3]
    cif_path = save_structure(solutions, tmp_path / "three.cif")
    pdb_path = save_structure(solutions, tmp_path / "three.pdb")

    cif = MMCIF2Dict(str(cif_path))
    assert sorted(set(cif["_atom_site.pdbx_PDB_model_num"])) == ["1", "2", "3"]

    model_lines = [line.split() for line in pdb_path.read_text().splitlines() if line.startswith("MODEL")]
    assert [int(fields[1]) for fields in model_lines] == [1, 2, 3]

    parsed = PDBParser(QUIET=True).get_structure("three", str(pdb_path))
    assert len(parsed) == 3
    for model, solution in zip(parsed, solutions):
        np.testing.assert_allclose(
            model["A"][18]["O3'"].coord, solution[18].atom_position("O3'"), atol=1e-3
        )
