from typing import List, Optional

CATEGORIES = ["analytical", "creative", "social", "leadership", "practical"]


class Option:
    def __init__(self, key: str, label: str, weight: int, category: Optional[str] = None):
        self.key = key
        self.label = label
        self.weight = weight
        # None means "same as the question's category"
        self.category = category

    def to_dict(self, default_category: str) -> dict:
        return {
            "key": self.key,
            "label": self.label,
            "weight": self.weight,
            "category": self.category or default_category,
        }


class Question:
    def __init__(self, qid: int, text: str, category: str, options: List[Option]):
        if category not in CATEGORIES:
            raise ValueError(f"Invalid category: {category}")
        self.id = qid
        self.text = text
        self.category = category
        self.options = options

    def option(self, key: str) -> Optional[Option]:
        for opt in self.options:
            if opt.key == key:
                return opt
        return None

    def scoring_pair(self, key: str) -> tuple:
        """(category, weight) carried by the option with this key."""
        opt = self.option(key)
        if opt is None:
            raise ValueError(f"Invalid option {key!r} for question {self.id}")
        return opt.category or self.category, opt.weight

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "text": self.text,
            "category": self.category,
            "options": [opt.to_dict(self.category) for opt in self.options],
        }


# -----------------------------
# Quiz questions
# -----------------------------
# Two questions per category, weights 1-5, so every category lands in 2..10.

QUESTIONS: List[Question] = [

    # -------- Analytical --------
    Question(1, "A friend's laptop keeps crashing. What do you do first?", "analytical", [
        Option("A", "Check the error logs and look for a pattern", 5),
        Option("B", "Search online for people with the same problem", 3),
        Option("C", "Restart it a few times and see what happens", 2),
        Option("D", "Suggest they take it to a repair shop", 1),
    ]),
    Question(2, "How do you feel about puzzles and brain teasers?", "analytical", [
        Option("A", "I can't put them down until they're solved", 5),
        Option("B", "I enjoy them now and then", 3),
        Option("C", "Only if someone does them with me", 2),
        Option("D", "Not really my thing", 1),
    ]),

    # -------- Creative --------
    Question(3, "You have a free afternoon. Which sounds best?", "creative", [
        Option("A", "Drawing, writing or making music", 5),
        Option("B", "Redecorating or rearranging my space", 3),
        Option("C", "Watching a film and talking about it", 2),
        Option("D", "Catching up on chores", 1),
    ]),
    Question(4, "A school project has no fixed format. How do you react?", "creative", [
        Option("A", "Excited, I already have three unusual ideas", 5),
        Option("B", "I'll add my own twist to a standard format", 3),
        Option("C", "I'd rather look at examples first", 2),
        Option("D", "I wish someone would just tell me what to do", 1),
    ]),

    # -------- Social --------
    Question(5, "A classmate looks upset. What do you usually do?", "social", [
        Option("A", "Sit with them and ask how they're doing", 5),
        Option("B", "Send them a message later", 3),
        Option("C", "Tell a teacher or friend who knows them better", 2),
        Option("D", "Give them space", 1),
    ]),
    Question(6, "How do you prefer to spend a group study session?", "social", [
        Option("A", "Explaining things to others", 5),
        Option("B", "Discussing ideas back and forth", 3),
        Option("C", "Working quietly near other people", 2),
        Option("D", "I study better alone", 1),
    ]),

    # -------- Leadership --------
    Question(7, "Your team can't agree on a plan. What happens next?", "leadership", [
        Option("A", "I propose a decision and get everyone moving", 5),
        Option("B", "I suggest a vote", 3),
        Option("C", "I go along with whoever feels strongest", 2),
        Option("D", "I wait for someone else to sort it out", 1),
    ]),
    Question(8, "How do you feel about being responsible for others' results?", "leadership", [
        Option("A", "I like owning the outcome", 5),
        Option("B", "Fine, if I get to pick the team", 3),
        Option("C", "A bit nervous, but I'd try", 2),
        Option("D", "I'd rather be responsible only for myself", 1),
    ]),

    # -------- Practical --------
    Question(9, "Something in your home breaks. What do you do?", "practical", [
        Option("A", "Grab the tools and fix it myself", 5),
        Option("B", "Watch a tutorial and give it a go", 3),
        Option("C", "Help someone else while they fix it", 2),
        Option("D", "Call someone who knows how", 1),
    ]),
    Question(10, "Which kind of learning sticks with you best?", "practical", [
        Option("A", "Doing it with my hands", 5),
        Option("B", "Watching a demonstration", 3),
        Option("C", "Reading step-by-step instructions", 2),
        Option("D", "Listening to an explanation", 1),
    ]),
]
