import random

import pytest

from generation.paper_assembler import (
    InsufficientQuestionsError, UnknownPaperTypeError, assemble_paper, describe_shortfalls,
)
from generation.quota import QUOTA_TABLES, get_quota, total_questions
from generation.schemas import Shortfall
from generation.shuffler import Shuffler
from generation.unit_index import UnitIndex
from ingestion.bank_builder import build_question_bank
from ingestion.errors import PaperGenerationError
from ingestion.schemas import QuestionKind
from tests.conftest import MID1_FIB, MID1_MC, make_bank_rows, make_row

MC = QuestionKind.MULTIPLE_CHOICE
FIB = QuestionKind.FILL_IN_THE_BLANK


def index_for(rows):
    return UnitIndex.from_bank(build_question_bank(rows))


class RecordingShuffler(Shuffler):
    def __init__(self):
        super().__init__(random.Random(0))
        self.calls = 0

    def shuffle(self, items):
        self.calls += 1
        return super().shuffle(items)


def expected_layout(paper_type):
    return [(req.unit, req.kind.value) for req in get_quota(paper_type) for _ in range(req.count)]


@pytest.mark.parametrize("paper_type", ["mid1", "mid2"])
def test_quota_tables_hold_ten_questions(paper_type):
    assert total_questions(paper_type) == 10


def test_unknown_quota():
    with pytest.raises(KeyError):
        get_quota("final")


@pytest.mark.parametrize("paper_type", ["mid1", "mid2"])
def test_full_paper_follows_template(full_rows, paper_type):
    paper = assemble_paper(paper_type, index_for(full_rows), Shuffler.seeded(11))

    assert len(paper.questions) == 10
    assert [(q.unit, q.type) for q in paper.questions] == expected_layout(paper_type)
    assert len({q.question for q in paper.questions}) == 10


def test_mid1_multiple_choice_block_first(mid1_rows):
    paper = assemble_paper("mid1", index_for(mid1_rows), Shuffler.seeded(1))
    kinds = [q.type for q in paper.questions]
    assert kinds == ["multiple-choice"] * 5 + ["fill-in-the-blank"] * 5


def test_exact_pools_use_every_question(mid2_rows):
    paper = assemble_paper("mid2", index_for(mid2_rows), Shuffler.seeded(2))
    bank_texts = {q.question for q in build_question_bank(mid2_rows)}
    assert {q.question for q in paper.questions} == bank_texts


def test_multiple_choice_options_are_carried(mid1_rows):
    paper = assemble_paper("mid1", index_for(mid1_rows), Shuffler.seeded(3))
    first = paper.questions[0]
    assert (first.option_a, first.option_b, first.option_c, first.option_d) == (
        "first", "second", "third", "fourth",
    )
    assert not hasattr(paper.questions[-1], "option_a")


def test_seed_reproduces_paper(full_rows):
    index = index_for(full_rows)
    a = assemble_paper("mid1", index, Shuffler.seeded(99))
    b = assemble_paper("mid1", index, Shuffler.seeded(99))
    assert a == b


def test_paper_details_from_first_selected_question():
    rows = (
        make_bank_rows({1: 2}, Subject="Data Structures", Month="April", Year=3)
        + make_bank_rows({2: 2, 3: 1}, MID1_FIB, Subject="Other Subject")
    )
    paper = assemble_paper("mid1", index_for(rows), Shuffler.seeded(5))

    details = paper.paper_details
    assert details.subject == "Data Structures"
    assert details.month == "April"
    assert details.year == 3
    assert details.subject_code == "CS101"
    assert details.branch == "CSE"


def test_shortfall_reported_before_drawing():
    rows = make_bank_rows({1: 2, 2: 1, 3: 1}, MID1_FIB)
    shuffler = RecordingShuffler()

    with pytest.raises(InsufficientQuestionsError) as exc:
        assemble_paper("mid1", index_for(rows), shuffler)

    assert shuffler.calls == 0
    assert exc.value.shortfalls == [Shortfall(unit=2, kind=MC, required=2, found=1)]
    assert "Unit 2" in str(exc.value)
    assert "found 1" in str(exc.value)


def test_every_shortfall_is_listed():
    rows = make_bank_rows({1: 2, 2: 2}, {1: 1, 2: 2, 3: 1})
    with pytest.raises(InsufficientQuestionsError) as exc:
        assemble_paper("mid1", index_for(rows))

    pairs = {(s.unit, s.kind) for s in exc.value.shortfalls}
    assert pairs == {(3, MC), (1, FIB)}
    message = str(exc.value)
    assert message == (
        "Insufficient multiple-choice questions for Mid 1: Need 1 from Unit 3 (found 0); "
        "Insufficient fill-in-the-blank questions for Mid 1: Need 2 from Unit 1 (found 1)"
    )


def test_describe_shortfalls_groups_by_kind():
    shortfalls = [
        Shortfall(unit=4, kind=MC, required=2, found=0),
        Shortfall(unit=5, kind=MC, required=2, found=1),
    ]
    assert describe_shortfalls("mid2", shortfalls) == (
        "Insufficient multiple-choice questions for Mid 2: "
        "Need 2 from Unit 4 (found 0), Need 2 from Unit 5 (found 1)"
    )


def test_unknown_paper_type(mid1_rows):
    with pytest.raises(UnknownPaperTypeError) as exc:
        assemble_paper("final", index_for(mid1_rows))
    assert str(exc.value) == 'Invalid paperType. Use "mid1" or "mid2".'
    assert isinstance(exc.value, PaperGenerationError)


def test_missing_paper_type(mid1_rows):
    with pytest.raises(UnknownPaperTypeError):
        assemble_paper(None, index_for(mid1_rows))


def test_quota_units_are_in_range():
    for requirements in QUOTA_TABLES.values():
        assert all(1 <= req.unit <= 5 for req in requirements)


def test_question_with_image_url():
    rows = make_bank_rows(MID1_MC, MID1_FIB)
    rows[0] = make_row("U1 pic ? A. w B. x C. y D. z", "M", 1, **{"Image Url": "http://img.example/1.png"})
    paper = assemble_paper("mid1", index_for(rows), Shuffler.seeded(8))
    urls = [q.image_url for q in paper.questions if q.unit == 1 and q.type == "multiple-choice"]
    assert "http://img.example/1.png" in urls
