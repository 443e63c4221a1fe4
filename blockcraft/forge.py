"""Client side of the mod loader handshake carried over plugin channels."""

from __future__ import annotations

import json
import struct
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum

HANDSHAKE_CHANNEL = "FML|HS"
REGISTER_CHANNEL = "REGISTER"
REGISTERED_CHANNELS = ("FML|HS", "FML", "FML|MP", "FML", "FORGE")

Sender = Callable[[str, bytes], None]


class ForgePacket(IntEnum):
    SERVER_HELLO = 0
    CLIENT_HELLO = 1
    MOD_LIST = 2
    REGISTRY_DATA = 3
    HANDSHAKE_ACK = 255
    HANDSHAKE_RESET = 254


class HandshakeClientPhase(IntEnum):
    START = 0
    HELLO = 1
    WAITING_SERVER_DATA = 2
    WAITING_SERVER_COMPLETE = 3
    PENDING_COMPLETE = 4
    COMPLETE = 5
    DONE = 6
    ERROR = 7


class HandshakeServerPhase(IntEnum):
    START = 0
    HELLO = 1
    WAITING_ACK = 2
    COMPLETE = 3
    DONE = 4
    ERROR = 5


@dataclass(frozen=True)
class ModInfo:
    name: str
    version: str


def encode_varint(value: int) -> bytes:
    """Encode a 32-bit signed integer as a protocol varint."""
    if not -(1 << 31) <= value < (1 << 31):
        raise ValueError(f"{value} does not fit in 32 bits")
    remaining = value & 0xFFFFFFFF
    out = bytearray()
    while True:
        byte = remaining & 0x7F
        remaining >>= 7
        if remaining:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def encode_string(value: str) -> bytes:
    """Encode a string as a varint byte length followed by its UTF-8 bytes."""
    data = value.encode("utf-8")
    return encode_varint(len(data)) + data


def _require(data: bytes, size: int, what: str) -> None:
    if len(data) < size:
        raise ValueError(f"{what} needs {size} bytes, got {len(data)}")


def _ack(phase: HandshakeClientPhase) -> bytes:
    return bytes((ForgePacket.HANDSHAKE_ACK, phase))


class ForgeHandler:
    """Answers the server's handshake messages and collects its mod list.

    ``sender`` is called with a channel name and payload for each plugin
    message that has to go back to the server.
    """

    def __init__(self, sender: Sender | None = None) -> None:
        self.sender = sender
        self._mods: list[ModInfo] = []
        self._mod_info_received = False
        self._handlers: dict[str, Callable[[bytes], None]] = {
            HANDSHAKE_CHANNEL: self._handle_data,
        }

    @property
    def mods(self) -> list[ModInfo]:
        return list(self._mods)

    def has_mod_info(self) -> bool:
        return self._mod_info_received

    def handle_plugin_message(self, channel: str, data: bytes) -> None:
        """Dispatch a plugin message; channels without a handler are ignored."""
        handler = self._handlers.get(channel)
        if handler is not None:
            handler(bytes(data))

    def handle_status_response(self, response: str) -> None:
        """Read the mod list out of a server status response."""
        try:
            document = json.loads(response)
        except (json.JSONDecodeError, TypeError):
            self._mod_info_received = True
            return

        modinfo = document.get("modinfo") if isinstance(document, dict) else None
        mod_list = modinfo.get("modList") if isinstance(modinfo, dict) else None
        if isinstance(mod_list, list):
            for mod in mod_list:
                if not isinstance(mod, dict):
                    continue
                mod_id = mod.get("modid")
                version = mod.get("version")
                if isinstance(mod_id, str) and isinstance(version, str):
                    self._mods.append(ModInfo(mod_id, version))
        self._mod_info_received = True

    def _send(self, channel: str, payload: bytes) -> None:
        if self.sender is None:
            raise RuntimeError("no connection to send plugin messages on")
        self.sender(channel, payload)

    def _mod_list_payload(self) -> bytes:
        parts = [bytes((ForgePacket.MOD_LIST,)), encode_varint(len(self._mods))]
        for mod in self._mods:
            parts.append(encode_string(mod.name))
            parts.append(encode_string(mod.version))
        return b"".join(parts)

    def _handle_data(self, data: bytes) -> None:
        if not data:
            return
        discriminator = data[0]

        if discriminator == ForgePacket.SERVER_HELLO:
            _require(data, 2, "server hello")
            version = data[1]
            if version > 1 and len(data) > 2:
                _require(data, 6, "server hello with dimension")
                struct.unpack(">i", data[2:6])
            self._send(
                REGISTER_CHANNEL,
                b"".join(name.encode("utf-8") + b"\x00" for name in REGISTERED_CHANNELS),
            )
            self._send(HANDSHAKE_CHANNEL, bytes((ForgePacket.CLIENT_HELLO, version)))
            self._send(HANDSHAKE_CHANNEL, self._mod_list_payload())
        elif discriminator == ForgePacket.MOD_LIST:
            self._send(HANDSHAKE_CHANNEL, _ack(HandshakeClientPhase.WAITING_SERVER_DATA))
        elif discriminator == ForgePacket.REGISTRY_DATA:
            _require(data, 2, "registry data")
            if not data[1]:
                self._send(
                    HANDSHAKE_CHANNEL, _ack(HandshakeClientPhase.WAITING_SERVER_COMPLETE)
                )
        elif discriminator == ForgePacket.HANDSHAKE_ACK:
            _require(data, 2, "handshake ack")
            phase = data[1]
            if phase == HandshakeServerPhase.WAITING_ACK:
                self._send(HANDSHAKE_CHANNEL, _ack(HandshakeClientPhase.PENDING_COMPLETE))
            elif phase == HandshakeServerPhase.COMPLETE:
                self._send(HANDSHAKE_CHANNEL, _ack(HandshakeClientPhase.COMPLETE))