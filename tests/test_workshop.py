import unittest
from datetime import date

from services.errors import NoResponsesError, UnknownPromptError, UnknownSuggestionError
from services.export import render_export
from services.insights import summarize
from services.prompt_card import PromptCard
from services.prompts import SPECULATIVE_PROMPTS, Prompt
from services.responses import Response, ResponseStore
from services.workshop import ANSWERING, SUMMARY, WorkshopSession


class ResponseStoreTests(unittest.TestCase):
    def test_upsert_replaces_in_place_and_appends_new_ids(self) -> None:
        store = ResponseStore()
        store.upsert("a", "Qa", "first")
        store.upsert("b", "Qb", "second")
        store.upsert("a", "Qa", "updated")

        self.assertEqual(len(store), 2)
        self.assertEqual([r.id for r in store], ["a", "b"])
        self.assertEqual(store.get("a").answer, "updated")

        store.upsert("c", "Qc", "third")
        self.assertEqual([r.id for r in store.to_list()], ["a", "b", "c"])
        self.assertEqual(store.answers(), ["updated", "second", "third"])

    def test_clear_discards_everything(self) -> None:
        store = ResponseStore()
        store.upsert("a", "Qa", "first")
        store.clear()

        self.assertEqual(len(store), 0)
        self.assertNotIn("a", store)


class PromptCardTests(unittest.TestCase):
    def setUp(self) -> None:
        self.prompt = Prompt(
            id="p1",
            question="What if?",
            reflection="Why?",
            suggestions=("Alpha option", "Beta option", "Gamma option"),
        )
        self.reports = []
        self.card = PromptCard(self.prompt, 0, lambda *args: self.reports.append(args))

    def test_toggle_is_local_only(self) -> None:
        self.assertTrue(self.card.toggle())
        self.assertFalse(self.card.toggle())
        self.assertEqual(self.reports, [])

    def test_free_text_is_trimmed_and_reported_on_every_edit(self) -> None:
        self.card.set_answer("  We")
        self.card.set_answer("  We win  ")

        self.assertEqual(self.reports, [
            ("p1", "What if?", "We"),
            ("p1", "What if?", "We win"),
        ])

    def test_selected_suggestions_join_when_text_is_blank(self) -> None:
        self.card.toggle_suggestion("Gamma option")
        self.card.toggle_suggestion("Alpha option")

        self.assertEqual(self.card.final_answer, "Alpha option, Gamma option")
        self.assertEqual(self.reports[-1], ("p1", "What if?", "Alpha option, Gamma option"))

    def test_free_text_wins_over_selection(self) -> None:
        self.card.toggle_suggestion("Beta option")
        self.card.set_answer("Own words")

        self.assertEqual(self.card.final_answer, "Own words")

    def test_empty_combination_is_not_reported(self) -> None:
        self.card.toggle_suggestion("Beta option")
        self.card.toggle_suggestion("Beta option")
        self.card.set_answer("   ")

        self.assertEqual(len(self.reports), 1)
        self.assertFalse(self.card.captured)

    def test_unknown_suggestion_raises(self) -> None:
        with self.assertRaises(UnknownSuggestionError):
            self.card.toggle_suggestion("Not offered")

    def test_number_is_one_based(self) -> None:
        self.assertEqual(self.card.number, 1)


class WorkshopSessionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.session = WorkshopSession()

    def test_one_card_per_prompt(self) -> None:
        self.assertEqual(len(self.session.cards), len(SPECULATIVE_PROMPTS))
        self.assertEqual(self.session.progress, (0, 5))

    def test_card_edits_reach_responses(self) -> None:
        self.session.card("market-volume").set_answer("Premium work")
        self.session.card("trust-mandate").set_answer("Hire experts")
        self.session.card("market-volume").set_answer("Digital products")

        self.assertEqual([r.id for r in self.session.responses],
                         ["market-volume", "trust-mandate"])
        self.assertEqual(self.session.responses[0].answer, "Digital products")
        self.assertEqual(self.session.progress, (2, 5))

    def test_response_count_never_exceeds_prompt_count(self) -> None:
        for _ in range(3):
            for card in self.session.cards:
                card.toggle_suggestion(card.prompt.suggestions[0])
                card.set_answer("more text")

        self.assertEqual(len(self.session.responses), len(SPECULATIVE_PROMPTS))

    def test_summary_requires_a_response(self) -> None:
        with self.assertRaises(NoResponsesError):
            self.session.show_summary()
        self.assertEqual(self.session.view, ANSWERING)

        self.session.card("trust-mandate").set_answer("Answer")
        self.session.show_summary()
        self.assertEqual(self.session.view, SUMMARY)

    def test_back_discards_responses_and_resets_cards(self) -> None:
        card = self.session.card("trust-mandate")
        card.toggle()
        card.set_answer("Answer")
        self.session.show_summary()

        self.session.back()

        self.assertEqual(self.session.view, ANSWERING)
        self.assertEqual(self.session.responses, [])
        fresh = self.session.card("trust-mandate")
        self.assertFalse(fresh.expanded)
        self.assertEqual(fresh.answer, "")

    def test_unknown_prompt_raises(self) -> None:
        with self.assertRaises(UnknownPromptError):
            self.session.card("missing")

    def test_export_uses_current_responses(self) -> None:
        self.session.card("failure-scenario").set_answer("We were too slow")
        text = self.session.export_text(today=date(2026, 3, 7))

        self.assertIn("→ We were too slow", text)
        self.assertIn("• Moving too slowly in a fast-evolving market", text)
        self.assertTrue(text.rstrip().endswith("Generated on 3/7/2026"))


class ExportTests(unittest.TestCase):
    def test_question_line_is_followed_by_answer_line(self) -> None:
        responses = [Response(id="q1", question="Q1", answer="test answer")]
        text = render_export(responses, summarize(responses), generated_on=date(2026, 1, 2))
        lines = text.splitlines()

        index = lines.index("Q1")
        self.assertTrue(lines[index + 1].startswith("→ test answer"))

    def test_layout_and_theme_lines(self) -> None:
        responses = [
            Response(id="a", question="First?", answer="partnership partnership growth"),
            Response(id="b", question="Second?", answer="delivery"),
        ]
        text = render_export(responses, summarize(responses), generated_on=date(2026, 10, 19))

        self.assertTrue(text.startswith("Strategic Workshop Insights\n==========================\n\nRESPONSES:\n"))
        self.assertIn("KEY THEMES:\n• partnership (mentioned 2 times)", text)
        self.assertIn("STRATEGIC PRIORITIES:\n• Strategic partnerships and acquisitions", text)
        self.assertIn("POTENTIAL PITFALLS:\n• Gap between strategy and execution capabilities", text)
        self.assertIn("Generated on 10/19/2026", text)

    def test_key_themes_are_capped_at_ten(self) -> None:
        answer = " ".join(f"theme{chr(97 + i)}" for i in range(15))
        responses = [Response(id="a", question="Q", answer=answer)]
        text = render_export(responses, summarize(responses), generated_on=date(2026, 1, 1))

        self.assertEqual(text.count("(mentioned 1 times)"), 10)


if __name__ == "__main__":
    unittest.main()
