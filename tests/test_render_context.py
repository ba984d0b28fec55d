"""Tests for RenderContext scoping and ContextVar-held RenderState."""

import pytest

from miniweb import RenderContext, RenderState, TemplateRuntimeError, get_render_state, render_state
from miniweb.exceptions import ErrorCode


class TestRenderContext:
    def test_iteration_vars_shadow_data(self):
        context = RenderContext(data={"x": "data"}, iteration_vars={"x": "loop"})
        assert context.resolve("x") == "loop"

    def test_counter_vars_never_resolved(self):
        context = RenderContext(counter_vars={"x": "counter"})
        assert context.resolve("x") is None

    def test_scope_restores_bindings(self):
        context = RenderContext(iteration_vars={"x": "outer"})
        with context.scope("x", "forloop") as scope:
            scope["x"] = "inner"
            scope["forloop"] = object()
            assert context.resolve("x") == "inner"
        assert context.iteration_vars == {"x": "outer"}

    def test_scope_restores_on_error(self):
        context = RenderContext()
        with pytest.raises(RuntimeError), context.scope("x") as scope:
            scope["x"] = 1
            raise RuntimeError
        assert "x" not in context.iteration_vars


class TestRenderState:
    def test_none_outside_render(self):
        assert get_render_state() is None

    def test_render_state_context_manager(self):
        with render_state(meta={"k": "v"}) as state:
            assert get_render_state() is state
            assert state.get_meta("k") == "v"
            assert state.get_meta("missing", "d") == "d"
        assert get_render_state() is None

    def test_child_state_shares_meta_and_stacks(self):
        parent = RenderState(template_name="layout", line=4)
        parent.set_meta("csrf_token", "t")
        child = parent.child_state("page")
        assert child.depth == 1
        assert child.template_stack == [("layout", 4)]
        assert child.get_meta("csrf_token") == "t"

    def test_framework_state_does_not_count(self):
        child = RenderState().child_state("page")
        assert child.depth == 0
        assert child.template_stack == []

    def test_depth_limit(self):
        state = RenderState(template_name="a", depth=1, max_depth=2)
        with pytest.raises(TemplateRuntimeError) as exc_info:
            state.child_state("b")
        assert exc_info.value.code is ErrorCode.SLOT_DEPTH
