from umbra.hooks.core import HOOK_CONTEXT, EffectSlot, HookContext
from umbra.hooks.effects import use_effect, use_layout_effect
from umbra.hooks.memo import use_callback, use_memo
from umbra.hooks.refs import use_imperative_handle, use_ref
from umbra.hooks.state import use_reducer, use_state

__all__ = [
	"HOOK_CONTEXT",
	"EffectSlot",
	"HookContext",
	"use_callback",
	"use_effect",
	"use_imperative_handle",
	"use_layout_effect",
	"use_memo",
	"use_reducer",
	"use_ref",
	"use_state",
]
