# Public API

# Specs
from umbra.nodes import ComponentSpec as ComponentSpec
from umbra.nodes import HostSpec as HostSpec
from umbra.nodes import Spec as Spec
from umbra.nodes import h as h
from umbra.nodes import make_spec as make_spec

# Components
from umbra.component import Fragment as Fragment
from umbra.component import forward_ref as forward_ref
from umbra.component import memo as memo

# Context
from umbra.context import Context as Context
from umbra.context import create_context as create_context
from umbra.context import use_context as use_context

# Hooks
from umbra.hooks.effects import use_effect as use_effect
from umbra.hooks.effects import use_layout_effect as use_layout_effect
from umbra.hooks.memo import use_callback as use_callback
from umbra.hooks.memo import use_memo as use_memo
from umbra.hooks.refs import use_imperative_handle as use_imperative_handle
from umbra.hooks.refs import use_ref as use_ref
from umbra.hooks.state import use_reducer as use_reducer
from umbra.hooks.state import use_state as use_state
from umbra.refs import Ref as Ref

# Roots and output
from umbra.dom import Document as Document
from umbra.dom import Element as Element
from umbra.dom import Medium as Medium
from umbra.dom import create_container as create_container
from umbra.root import Root as Root
from umbra.root import create_root as create_root
from umbra.root import render as render
from umbra.root import unmount as unmount

# Scheduling
from umbra.scheduling import AsyncioScheduler as AsyncioScheduler
from umbra.scheduling import ManualScheduler as ManualScheduler
from umbra.scheduling import Scheduler as Scheduler

# Errors
from umbra.errors import HookError as HookError
from umbra.errors import InvalidHookCallError as InvalidHookCallError
from umbra.errors import InvalidSpecError as InvalidSpecError
from umbra.errors import RenderLoopError as RenderLoopError
from umbra.errors import RenderPhaseUpdateError as RenderPhaseUpdateError
from umbra.errors import UmbraError as UmbraError

# Config
from umbra.env import env as env
