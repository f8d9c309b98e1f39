"""Lightweight websocket payload validation utilities.

Provides minimal schema-like checking with clear, consistent error
responses for Socket.IO handlers.

Schema Mini-Language (Python dict):
{
  'field_name': ('type', required: bool, extras: dict)
}
Supported types: 'str', 'int', 'bool', 'dict'
Extras examples:
  max_len, min_len (str), choices (str), min / max (int)

Example:
 schema = {
   'dir': ('str', True, {'choices': ('up', 'down', 'left', 'right')})
 }
 ok, data_or_err = validate(data, schema)

If invalid: (False, {'field': 'dir', 'error': 'not an allowed value', 'code': 'choices'})
If valid: (True, normalized_data)
"""
from __future__ import annotations

from typing import Any, Dict, Tuple

PRIMITIVES = {
    'str': str,
    'int': int,
    'bool': bool,
    'dict': dict,
}


def _fail(field: str, message: str, code: str) -> Tuple[bool, Dict[str, Any]]:
    return False, {'field': field, 'error': message, 'code': code}


def validate(payload: Any, schema: Dict[str, tuple]) -> Tuple[bool, Dict[str, Any]]:
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        return _fail('__root__', 'payload must be an object', 'type')
    out = {}
    for name, rule in schema.items():
        if not isinstance(rule, tuple) or len(rule) < 2:
            return _fail('__schema__', f'invalid rule for {name}', 'schema')
        type_name, required = rule[0], rule[1]
        extras = rule[2] if len(rule) > 2 else {}
        if type_name not in PRIMITIVES:
            return _fail('__schema__', f'unsupported type {type_name}', 'schema')
        if name not in payload or payload[name] is None:
            if required:
                return _fail(name, 'missing required field', 'required')
            continue
        value = payload[name]
        py_type = PRIMITIVES[type_name]
        # bool is an int subclass; keep the two apart
        if type_name == 'int' and isinstance(value, bool):
            return _fail(name, 'expected int', 'type')
        if not isinstance(value, py_type):
            return _fail(name, f'expected {type_name}', 'type')
        if type_name == 'str':
            s = value.strip().lower() if extras.get('lower') else value.strip()
            if len(s) == 0:
                return _fail(name, 'must not be empty', 'empty')
            if 'max_len' in extras and len(s) > extras['max_len']:
                return _fail(name, 'too long', 'max_len')
            if 'min_len' in extras and len(s) < extras['min_len']:
                return _fail(name, 'too short', 'min_len')
            if 'choices' in extras and s not in extras['choices']:
                return _fail(name, 'not an allowed value', 'choices')
            out[name] = s
        elif type_name == 'int':
            if 'min' in extras and value < extras['min']:
                return _fail(name, 'too small', 'min')
            if 'max' in extras and value > extras['max']:
                return _fail(name, 'too large', 'max')
            out[name] = value
        else:
            out[name] = value
    return True, out


# Predefined schemas used by handlers
START_ROUND = {
    'difficulty': ('str', False, {'max_len': 32, 'lower': True})
}
MOVE_INTENT = {
    'dir': ('str', True, {'max_len': 16, 'lower': True})
}
TOGGLE_DEBUG: Dict[str, tuple] = {}
