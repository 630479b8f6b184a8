# ╔══════════════════════════════════════════════════════════════════════╗
# ║  Scalargrad — Scalar Autodiff Engine                                 ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""nn.Module — base class for scalar-parameter modules and containers."""
from __future__ import annotations

from collections import OrderedDict
from typing import Iterable, Iterator

from ..value import Value
from .parameter import Parameter


class Module:
    """Base class for everything that owns :class:`Parameter` s.

    Assigning a ``Parameter`` or a ``Module`` to an attribute registers it;
    registration order is the order of :meth:`named_parameters` and of
    :meth:`state_dict` keys.
    """

    _modules: OrderedDict
    _parameters: OrderedDict

    def __init__(self):
        object.__setattr__(self, '_parameters', OrderedDict())
        object.__setattr__(self, '_modules', OrderedDict())

    def forward(self, *args, **kwargs):
        raise NotImplementedError(
            f"{type(self).__name__} does not implement forward()")

    def __call__(self, *args, **kwargs):
        return self.forward(*args, **kwargs)

    # ---- Registration ----

    def __setattr__(self, name: str, value):
        if isinstance(value, Parameter):
            self.__dict__.pop(name, None)
            self._modules.pop(name, None)
            self._parameters[name] = value
        elif isinstance(value, Module):
            self.__dict__.pop(name, None)
            self._parameters.pop(name, None)
            self._modules[name] = value
        else:
            # A plain value replaces any registered entry of that name
            self._parameters.pop(name, None)
            self._modules.pop(name, None)
            object.__setattr__(self, name, value)

    def __getattr__(self, name: str):
        # Only reached when normal lookup fails
        for registry in ('_parameters', '_modules'):
            entries = object.__getattribute__(self, registry)
            if name in entries:
                return entries[name]
        raise AttributeError(
            f"'{type(self).__name__}' object has no attribute '{name}'")

    def __delattr__(self, name: str):
        for registry in (self._parameters, self._modules):
            if name in registry:
                del registry[name]
                return
        object.__delattr__(self, name)

    # ---- Traversal ----

    def named_parameters(self, prefix: str = '',
                         recurse: bool = True) -> Iterator[tuple[str, Parameter]]:
        """Yield ``(dotted_name, parameter)``, own parameters first."""
        dot = f"{prefix}." if prefix else ''
        for name, p in self._parameters.items():
            yield dot + name, p
        if not recurse:
            return
        for name, child in self._modules.items():
            yield from child.named_parameters(dot + name)

    def parameters(self, recurse: bool = True) -> Iterator[Parameter]:
        for _, p in self.named_parameters(recurse=recurse):
            yield p

    def children(self) -> Iterator['Module']:
        yield from self._modules.values()

    def modules(self) -> Iterator['Module']:
        yield self
        for child in self.children():
            yield from child.modules()

    # ---- Serialization ----

    def state_dict(self) -> OrderedDict:
        """Map dotted parameter names to their current float values."""
        return OrderedDict(
            (name, p.data) for name, p in self.named_parameters())

    def load_state_dict(self, state_dict: dict, strict: bool = True):
        """Copy values from *state_dict* into the matching parameters.

        With ``strict=True`` the key sets must match exactly; otherwise
        unknown keys are ignored and missing ones are left unchanged.
        """
        own = OrderedDict(self.named_parameters())
        if strict:
            missing = [k for k in own if k not in state_dict]
            unexpected = [k for k in state_dict if k not in own]
            if missing or unexpected:
                raise ValueError(
                    f"Error loading state_dict for {type(self).__name__}: "
                    f"missing keys {missing}, unexpected keys {unexpected}")
        for key, val in state_dict.items():
            if key in own:
                own[key].data = val.data if isinstance(val, Value) else val

    def zero_grad(self):
        for p in self.parameters():
            p.grad = 0.0

    # ---- Display ----

    def extra_repr(self) -> str:
        return ''

    def __repr__(self) -> str:
        head = f"{type(self).__name__}({self.extra_repr()}"
        if not self._modules:
            return head + ")"
        body = [head]
        for name, child in self._modules.items():
            nested = repr(child).replace('\n', '\n  ')
            body.append(f"  ({name}): {nested}")
        body.append(")")
        return '\n'.join(body)


# ---- Containers ----

class ModuleList(Module):
    """Submodules indexed by position, registered as ``'0'``, ``'1'``, ..."""

    def __init__(self, modules: Iterable[Module] | None = None):
        super().__init__()
        for m in modules or ():
            self.append(m)

    def append(self, module: Module) -> 'ModuleList':
        if not isinstance(module, Module):
            raise TypeError(
                f"ModuleList holds Modules, got {type(module).__name__}")
        self._modules[str(len(self._modules))] = module
        return self

    def __getitem__(self, idx: int) -> Module:
        return list(self._modules.values())[idx]

    def __len__(self) -> int:
        return len(self._modules)

    def __iter__(self) -> Iterator[Module]:
        return iter(self._modules.values())


class ParameterList(Module):
    """Parameters indexed by position, registered as ``'0'``, ``'1'``, ..."""

    def __init__(self, parameters: Iterable[Parameter | float] | None = None):
        super().__init__()
        for p in parameters or ():
            self.append(p)

    def append(self, param: Parameter | float) -> 'ParameterList':
        """Register *param*; a plain number becomes a new :class:`Parameter`.

        Any other :class:`Value` raises ``TypeError``.
        """
        if isinstance(param, Value) and not isinstance(param, Parameter):
            raise TypeError(
                "ParameterList only holds Parameters; wrap the value as "
                "nn.Parameter(...) and build the graph on that")
        if not isinstance(param, Parameter):
            param = Parameter(param)
        self._parameters[str(len(self._parameters))] = param
        return self

    def __getitem__(self, idx: int) -> Parameter:
        return list(self._parameters.values())[idx]

    def __len__(self) -> int:
        return len(self._parameters)

    def __iter__(self) -> Iterator[Parameter]:
        return iter(self._parameters.values())

    def extra_repr(self) -> str:
        return ', '.join(f"{p.data:.4f}" for p in self)
