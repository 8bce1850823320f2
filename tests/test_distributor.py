from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from group_distributor import GroupDistributor
from group_distributor.__main__ import main
from group_distributor.utils import validate_config

CSV_ROSTER = (
    "Sequence,Name,Age Group,Gender,Married,Relative Id\n"
    "1,Amir,adult,M,y,2\n"
    "2,Huda,adult,F,y,1\n"
    "3,Sami,child,M,n,1\n"
    "4,Lina,child,F,n,1\n"
    "5,Nour,infant,F,n,\n"
)


@pytest.fixture
def roster_file(tmp_path: Path) -> Path:
    path = tmp_path / "roster.csv"
    path.write_text(CSV_ROSTER, encoding="utf-8")
    return path


def test_distribute_requires_roster() -> None:
    with pytest.raises(ValueError, match="No roster loaded"):
        GroupDistributor().distribute()


def test_distribute_from_file(roster_file: Path) -> None:
    distributor = GroupDistributor(num_groups=2, separate_spouses=True)
    distributor.read_roster_file(str(roster_file))

    groups = distributor.distribute()

    assert [[p.name for p in g] for g in groups] == [
        ["Amir", "Sami", "Nour"],
        ["Huda", "Lina"],
    ]
    assert distributor.groups is groups


def test_summarize_roster(roster_file: Path) -> None:
    distributor = GroupDistributor(selected_age_groups=["adult", "infant"])
    distributor.read_roster_file(str(roster_file))

    summary = distributor.summarize_roster()

    assert summary["total_people"] == 5
    assert summary["selected_people"] == 3
    assert summary["married"] == 2
    assert summary["by_age_group"]["child"] == 2


def test_balance_report(make_person) -> None:
    distributor = GroupDistributor(num_groups=3, selected_age_groups=["child", "adult"])
    distributor.set_roster([make_person("child") for _ in range(4)] + [make_person("adult")])

    with pytest.raises(ValueError, match="No groups available"):
        distributor.balance_report()

    distributor.distribute()
    report = distributor.balance_report()

    assert list(report.columns) == ["child", "adult", "Total"]
    assert list(report.index) == [1, 2, 3]
    assert report["child"].tolist() == [2, 1, 1]
    assert report["adult"].tolist() == [1, 0, 0]
    assert report["Total"].tolist() == [3, 1, 1]


def test_update_config(capsys) -> None:
    distributor = GroupDistributor()

    distributor.update_config(num_groups=4, selected_age_groups=["Yong Adult"],
                              strict_spouses=True, colour="blue")

    assert distributor.config.num_groups == 4
    assert distributor.config.selected_age_groups == ["young adult"]
    assert distributor.strict_spouses is True
    assert "Unknown option 'colour'" in capsys.readouterr().out


def test_print_groups(make_person, capsys) -> None:
    distributor = GroupDistributor(num_groups=2)
    distributor.print_groups()
    assert "No groups available." in capsys.readouterr().out

    distributor.set_roster([make_person("senior", name="Samir"), make_person("senior"),
                            make_person("child")])
    distributor.distribute()
    distributor.print_groups()

    out = capsys.readouterr().out
    # the child ties on an empty column and joins group 1
    assert "Group 1: 2 people (Child x1, Senior x1)" in out
    assert "Group 2: 1 people (Senior x1)" in out
    assert "Samir" in out


def test_write_groups_to_file(roster_file: Path, tmp_path: Path) -> None:
    distributor = GroupDistributor(num_groups=2, separate_spouses=True)
    distributor.read_roster_file(str(roster_file))
    distributor.distribute()
    output = tmp_path / "groups.xlsx"

    distributor.write_groups_to_file(str(output))

    members = pd.read_excel(output, sheet_name="Groups")
    assert members["Group"].tolist() == [1, 1, 1, 2, 2]
    assert members["Name"].tolist() == ["Amir", "Sami", "Nour", "Huda", "Lina"]
    assert members["Married"].tolist() == ["Y", "N", "N", "Y", "N"]

    summary = pd.read_excel(output, sheet_name="Summary")
    assert summary["Total"].tolist() == [3, 2]


def test_cli_writes_output(roster_file: Path, tmp_path: Path, capsys) -> None:
    output = tmp_path / "out.xlsx"

    main([str(roster_file), "-n", "2", "--separate-spouses", "-o", str(output)])

    assert output.exists()
    out = capsys.readouterr().out
    assert "Input file validation successful." in out
    assert "DISTRIBUTED GROUPS" in out


def test_cli_validate_only(roster_file: Path) -> None:
    with pytest.raises(SystemExit) as exc:
        main([str(roster_file), "--validate-only"])
    assert exc.value.code == 0


def test_cli_rejects_invalid_roster(tmp_path: Path, capsys) -> None:
    path = tmp_path / "bad.csv"
    path.write_text("Name,Age Group\nAli,teen\n", encoding="utf-8")

    with pytest.raises(SystemExit) as exc:
        main([str(path)])

    assert exc.value.code == 1
    assert "Invalid age group" in capsys.readouterr().out


def test_cli_rejects_bad_options(roster_file: Path, capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        main([str(roster_file), "-n", "0"])
    assert exc.value.code == 1
    assert "Number of groups must be at least 1" in capsys.readouterr().out

    with pytest.raises(SystemExit) as exc:
        main([str(roster_file), "-a", "teen"])
    assert exc.value.code == 1


def test_cli_empty_selection_fails(roster_file: Path, capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        main([str(roster_file), "-a", "senior"])

    assert exc.value.code == 1
    assert "No people in the selected age groups." in capsys.readouterr().out


def test_constructor_normalizes_selected_age_groups(make_person) -> None:
    distributor = GroupDistributor(num_groups=2, selected_age_groups=["Adult", "Yong Child"])
    distributor.set_roster([make_person("adult"), make_person("adult")])

    groups = distributor.distribute()

    assert distributor.config.selected_age_groups == ["adult", "young child"]
    assert [len(g) for g in groups] == [1, 1]


def test_constructor_rejects_unknown_age_group() -> None:
    with pytest.raises(ValueError, match="Invalid age group"):
        GroupDistributor(selected_age_groups=["teen"])


def test_explicit_empty_selection_is_kept() -> None:
    distributor = GroupDistributor(selected_age_groups=[])

    assert distributor.config.selected_age_groups == []
    is_valid, errors = validate_config(distributor.config)
    assert not is_valid
    assert errors == ["At least one age group must be selected"]


def test_update_config_discards_previous_groups(make_person, tmp_path: Path, capsys) -> None:
    distributor = GroupDistributor(num_groups=2)
    distributor.set_roster([make_person("child"), make_person("adult")])
    distributor.distribute()

    distributor.update_config(selected_age_groups=["adult"])

    assert distributor.groups is None
    distributor.print_groups()
    assert "No groups available." in capsys.readouterr().out
    with pytest.raises(ValueError, match="No groups available"):
        distributor.balance_report()

    groups = distributor.distribute()
    assert distributor.balance_report()["adult"].tolist() == [1, 0]
    distributor.write_groups_to_file(str(tmp_path / "groups.xlsx"))
    assert [[p.age_group for p in g] for g in groups] == [["adult"], []]
