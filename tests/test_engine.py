import pytest

from recipe_magic_core.engine import generate_ai_recipe
from recipe_magic_core.errors import WebhookError
from recipe_magic_core.persistence import list_user_recipes


def test_generate_ai_recipe_saves_parsed_draft(backend, user, sample_output):
    prompts = []

    def fake_generate(prompt):
        prompts.append(prompt)
        return sample_output

    result = generate_ai_recipe(
        prompt="  write a recipe of Biryani ",
        ctx=user,
        backend=backend,
        generate_text=fake_generate,
    )

    assert prompts == ["write a recipe of Biryani"]
    assert result["display_name"] == "Biryani"
    assert result["output_text"] == sample_output
    assert result["draft"].title == "Chicken Biryani"

    recipe = result["recipe"]
    assert recipe.title == "Chicken Biryani"
    assert recipe.is_ai_generated is True
    assert recipe.is_public is False
    assert recipe.user_id == user.user_id
    assert len(recipe.ingredients) == 3
    assert recipe.total_time == 65

    assert [r.id for r in list_user_recipes(backend, user)] == [recipe.id]


def test_webhook_failure_persists_nothing(backend, user):
    def failing_generate(prompt):
        raise WebhookError("Error llamando al webhook: timeout")

    with pytest.raises(WebhookError):
        generate_ai_recipe(
            prompt="recipe for lasagna",
            ctx=user,
            backend=backend,
            generate_text=failing_generate,
        )

    assert list_user_recipes(backend, user) == []


def test_empty_prompt_does_not_call_webhook(backend, user):
    def unexpected(prompt):
        raise AssertionError("webhook should not be called")

    with pytest.raises(ValueError, match="Please enter a recipe request"):
        generate_ai_recipe(prompt="   ", ctx=user, backend=backend, generate_text=unexpected)


def test_title_falls_back_to_display_name(backend, user):
    result = generate_ai_recipe(
        prompt="write a recipe of Biryani",
        ctx=user,
        backend=backend,
        generate_text=lambda prompt: "Ingredients:\n- rice\n\nInstructions:\n1. Cook",
    )

    assert result["recipe"].title == "Biryani"
    assert result["recipe"].ingredients == ["rice"]
    assert result["recipe"].servings == 0


def test_unparseable_output_is_saved_with_empty_fields(backend, user):
    result = generate_ai_recipe(
        prompt="something tasty",
        ctx=user,
        backend=backend,
        generate_text=lambda prompt: "Sorry, I cannot help with that.",
    )

    recipe = result["recipe"]
    assert recipe.title == "Something tasty"
    assert recipe.ingredients == []
    assert recipe.instructions == []


def test_default_generator_is_the_webhook_client(backend, user, sample_output, monkeypatch):
    monkeypatch.setattr(
        "recipe_magic_core.engine.generate_recipe_text", lambda prompt: sample_output
    )

    result = generate_ai_recipe(prompt="biryani", ctx=user, backend=backend)

    assert result["recipe"].title == "Chicken Biryani"
