from __future__ import annotations

from quiz_ladder.game.ladder.types import QuestionTemplate

STATIC_LADDER_BANK: tuple[QuestionTemplate, ...] = (
    QuestionTemplate(
        question_id="ladder_00_001",
        text="How many legs does a spider have?",
        answers=("Eight", "Six", "Ten", "Twelve"),
        correct_index=0,
        level=0,
    ),
    QuestionTemplate(
        question_id="ladder_01_001",
        text="Which colour do you get by mixing blue and yellow?",
        answers=("Green", "Purple", "Orange", "Brown"),
        correct_index=0,
        level=1,
    ),
    QuestionTemplate(
        question_id="ladder_02_001",
        text="What is the capital of Italy?",
        answers=("Rome", "Milan", "Naples", "Turin"),
        correct_index=0,
        level=2,
    ),
    QuestionTemplate(
        question_id="ladder_03_001",
        text="Which planet is known as the Red Planet?",
        answers=("Mars", "Venus", "Jupiter", "Mercury"),
        correct_index=0,
        level=3,
    ),
    QuestionTemplate(
        question_id="ladder_04_001",
        text="Who wrote 'Romeo and Juliet'?",
        answers=("William Shakespeare", "Charles Dickens", "Jane Austen", "Mark Twain"),
        correct_index=0,
        level=4,
    ),
    QuestionTemplate(
        question_id="ladder_05_001",
        text="What is the chemical symbol for gold?",
        answers=("Au", "Ag", "Gd", "Go"),
        correct_index=0,
        level=5,
    ),
    QuestionTemplate(
        question_id="ladder_06_001",
        text="In which year did the first manned Moon landing take place?",
        answers=("1969", "1965", "1972", "1959"),
        correct_index=0,
        level=6,
    ),
    QuestionTemplate(
        question_id="ladder_07_001",
        text="Which ocean is the largest?",
        answers=("Pacific", "Atlantic", "Indian", "Arctic"),
        correct_index=0,
        level=7,
    ),
    QuestionTemplate(
        question_id="ladder_08_001",
        text="Who painted 'The Starry Night'?",
        answers=("Vincent van Gogh", "Claude Monet", "Paul Cezanne", "Edvard Munch"),
        correct_index=0,
        level=8,
    ),
    QuestionTemplate(
        question_id="ladder_09_001",
        text="What is the smallest prime number?",
        answers=("2", "1", "3", "0"),
        correct_index=0,
        level=9,
    ),
    QuestionTemplate(
        question_id="ladder_10_001",
        text="Which element has the atomic number 26?",
        answers=("Iron", "Cobalt", "Nickel", "Manganese"),
        correct_index=0,
        level=10,
    ),
    QuestionTemplate(
        question_id="ladder_11_001",
        text="Which composer wrote the opera 'The Magic Flute'?",
        answers=("Mozart", "Beethoven", "Verdi", "Wagner"),
        correct_index=0,
        level=11,
    ),
    QuestionTemplate(
        question_id="ladder_12_001",
        text="What is the longest river in Europe?",
        answers=("Volga", "Danube", "Rhine", "Dnieper"),
        correct_index=0,
        level=12,
    ),
    QuestionTemplate(
        question_id="ladder_13_001",
        text="Which mathematician proved the incompleteness theorems?",
        answers=("Kurt Godel", "David Hilbert", "Alan Turing", "Emmy Noether"),
        correct_index=0,
        level=13,
    ),
    QuestionTemplate(
        question_id="ladder_14_001",
        text="In which year was the Treaty of Westphalia signed?",
        answers=("1648", "1618", "1701", "1555"),
        correct_index=0,
        level=14,
    ),
)
