"""Unit tests for template compilation and rendering."""

from __future__ import annotations

import typing as typ

from pagesmith.components.markdown import Markdown
from pagesmith.core.nodes import Node, Text, tag
from pagesmith.core.slots import RenderContext, RenderPolicy, Slot, SlotKey
from pagesmith.core.template import (
    ComponentSegment,
    SlotSegment,
    StaticSegment,
    Template,
    TemplateComponent,
)
from pagesmith.modules.content import ContentModule

if typ.TYPE_CHECKING:
    from pytest_mock import MockerFixture

NAME = SlotKey("name")
BADGE = SlotKey("badge")


def _tree() -> typ.Any:
    return tag(
        "section",
        tag("h1", Slot(NAME)),
        tag("img", attrs={"src": "/a.png", "alt": ""}, self_closing=True),
        tag("div", Slot(BADGE), classes="badge"),
    )


def test_source_contains_placeholders() -> None:
    template = Template.of(_tree())
    assert template.source == (
        '<section><h1>{{SLOT:name}}</h1><img src="/a.png" alt />'
        '<div class="badge">{{SLOT:badge}}</div></section>'
    )
    assert [key.name for key in template.slot_keys] == ["name", "badge"]


def test_adjacent_static_segments_are_merged() -> None:
    template = Template.of(_tree())
    kinds = [type(segment) for segment in template.segments]
    assert kinds == [StaticSegment, SlotSegment, StaticSegment, SlotSegment, StaticSegment]


def test_round_trip_matches_direct_render() -> None:
    context = RenderContext.of({NAME: "Ada & co", BADGE: tag("strong", text="new")})
    compiled = Template.of(_tree()).render(context)
    direct = _tree().render(context)
    assert compiled == direct
    assert "Ada &amp; co" in compiled
    assert "<strong>new</strong>" in compiled


def test_missing_slot_renders_empty() -> None:
    rendered = Template.of(tag("p", Slot(NAME))).render(RenderContext.empty())
    assert rendered == "<p></p>"


def test_literal_placeholder_in_content_is_not_substituted() -> None:
    tree = tag("div", Text("{{SLOT:name}}"), Slot(NAME))
    rendered = Template.of(tree).render(RenderContext.of({NAME: "X"}))
    assert rendered == "<div>{{SLOT:name}}X</div>"
    assert Template.of(tree).source == "<div>{{SLOT:name}}{{SLOT:name}}</div>"


def test_template_reuses_compiled_structure_across_contexts() -> None:
    template = Template.of(tag("p", Slot(NAME)))
    assert template.render(RenderContext.of({NAME: "one"})) == "<p>one</p>"
    assert template.render(RenderContext.of({NAME: "two"})) == "<p>two</p>"


def test_modules_are_built_once_during_compilation() -> None:
    module = ContentModule(title="T", content="body", markdown=False)
    template = Template.of(tag("main", module, Slot(NAME)))
    template.render(RenderContext.of({NAME: "a"}))
    template.render(RenderContext.of({NAME: "b"}))
    assert module.build_count == 1
    assert module.built


class _Greeting(Node):
    """Node whose output depends on the render-time context."""

    def render(self, context: RenderContext | None = None) -> str:
        name = context.get(NAME) if context is not None else None
        return f"hi {name}"


def test_context_reading_nodes_match_direct_render() -> None:
    tree = tag("p", _Greeting(), classes="greeting")
    context = RenderContext.of({NAME: "ada"})
    template = Template.of(tree)
    assert template.render(context) == tree.render(context) == '<p class="greeting">hi ada</p>'
    assert template.render(RenderContext.of({NAME: "bob"})) == '<p class="greeting">hi bob</p>'
    assert "{{COMPONENT:_Greeting}}" in template.source
    assert isinstance(template.segments[1], ComponentSegment)


def test_nested_component_follows_its_bound_context() -> None:
    bound = RenderContext.of({NAME: "a"})
    component = TemplateComponent(Template.of(tag("em", Slot(NAME))), bound)
    outer = Template.of(tag("p", component))
    assert outer.render() == "<p><em>a</em></p>"

    bound.put(NAME, "b")
    assert outer.render() == "<p><em>b</em></p>"
    assert outer.render() == tag("p", component).render()


def test_markdown_nodes_render_on_every_template_render(mocker: MockerFixture) -> None:
    spy = mocker.spy(Markdown, "render")
    template = Template.of(tag("article", Markdown("*hi*")))
    assert "<em>hi</em>" in template.render()
    assert "{{COMPONENT:Markdown}}" in template.source
    template.render()
    assert spy.call_count == 2, f"expected a render per call, got {spy.call_count}"


def test_compile_on_first_hit_counts_producer_calls(mocker: MockerFixture) -> None:
    status = SlotKey("status")
    template = Template.of(tag("span", Slot(status)))
    context = RenderContext.empty().with_policy(RenderPolicy.COMPILE_ON_FIRST_HIT)
    producer = tag("b", text="phase-1")
    spy = mocker.spy(producer, "render")
    context.put(status, producer)

    assert template.render(context) == "<span><b>phase-1</b></span>"
    template.render(context)
    assert spy.call_count == 1

    replacement = tag("b", text="phase-2")
    replacement_spy = mocker.spy(replacement, "render")
    context.put(status, replacement)
    assert template.render(context) == "<span><b>phase-2</b></span>"
    assert spy.call_count + replacement_spy.call_count == 2


def test_template_component_uses_bound_context() -> None:
    inner = Template.of(tag("em", Slot(NAME)))
    component = TemplateComponent(inner, RenderContext.of({NAME: "bound"}))
    outer = tag("p", component)
    assert outer.render(RenderContext.of({NAME: "ignored"})) == "<p><em>bound</em></p>"
