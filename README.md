# blockcraft

A pure-Python toolkit for the client side of a block-based sandbox game
protocol. It has no third-party runtime dependencies.

## Modules

- **`blockcraft.hashing`**: `sha1_hex_digest` writes a 20 byte sha1 digest in
  the game's signed hex form (negative digests get a minus sign and their two's
  complement, leading zeros are dropped); `sha1_twos_complement`; and
  `base64_decode`, which raises `ValueError` on bad input.
- **`blockcraft.tokenizer`**: `Tokenizer`, which splits a string on one
  delimiter character, with an optional cap on the number of tokens. After a
  split it supports `len()`, indexing and iteration.
- **`blockcraft.observer`**: `ObserverSubject`, an ordered listener list with
  `register_listener`, `unregister_listener` and `notify_listeners`, which
  calls a method by name on every listener.
- **`blockcraft.attribute`**: `Attribute` and `Modifier`. `Attribute.value()`
  applies modifiers in the order add, add-percent, multiply-percent
  (`ModifierOperation`).
- **`blockcraft.http_client`**: the `HTTPClient` interface, `UrllibHTTPClient`
  (timeout in milliseconds, certificates not verified, a failed connection
  gives an `HTTPResponse` with status 0), and the `parse_status` /
  `parse_headers` helpers for raw header blocks.
- **`blockcraft.block`**: `Block`, `BoundingBox` and `BlockRegistry`, with a
  process-wide registry from `default_registry()`. Lookups by packed id fall
  back to the block's meta-less base form.
- **`blockcraft.block_entity`**: block entity data classes such as `Chest`,
  `Furnace`, `Sign`, `Skull`, `MonsterSpawner` and `Piston`, plus
  `BlockEntityType`.
- **`blockcraft.chunk`**: paletted `Chunk` sections, read from a binary stream
  with `Chunk.load`, and `ChunkColumn`s of 16 sections with their block
  entities.
- **`blockcraft.world`**: `World` keeps chunk columns keyed by chunk
  coordinates, applies chunk data, block changes, multi-block changes,
  explosions, unloads and respawns through its `handle_*` methods, and
  notifies listeners. The default `WorldListener` records each event in its
  `events` list.
- **`blockcraft.entity`**: `Entity`, `LivingEntity`, `PlayerEntity`,
  `PaintingEntity`, `XPOrb`, `Monster`, `Creeper` and `EntityType`.
- **`blockcraft.forge`**: `ForgeHandler` answers the mod-loader handshake on
  the `FML|HS` plugin channel and reads the mod list from a status response.
  Outgoing messages go to a `sender(channel, payload)` callable you supply.
  `encode_varint` and `encode_string` write protocol varints and strings.
- **`blockcraft.versions`**: `ProtocolVersion`, `version_for_protocol` and
  `version_from_ping`.

## Installation

```
pip install .
```

Install the test extra and run the tests:

```
pip install .[test]
pytest
```

## Examples

Server hash for a login:

```python
import hashlib
from blockcraft.hashing import sha1_hex_digest

sha1_hex_digest(hashlib.sha1(b"jeb_").digest())
# '-7c9d5b0044c130109a5d7b5fb5c317c02b4e28c1'
```

Splitting with a token limit:

```python
from blockcraft.tokenizer import Tokenizer

tokens = Tokenizer("Content-Type: text/plain")
tokens(":", 2)
list(tokens)  # ['Content-Type', ' text/plain']
```

Attribute modifiers:

```python
import uuid
from blockcraft.attribute import Attribute, Modifier, ModifierOperation

speed = Attribute("generic.movementSpeed", 0.1)
speed.add_modifier(Modifier(uuid.uuid4(), 0.5, ModifierOperation.MULTIPLY_PERCENT))
speed.value()  # 0.15000000000000002
```

Choosing a protocol version from a server's status response:

```python
from blockcraft.versions import version_from_ping

version_from_ping({"version": {"name": "1.12.2", "protocol": 340}})
# ProtocolVersion.MINECRAFT_1_12_2
```

## What this package does not do

It does not open connections to game servers, frame or parse protocol
packets, encrypt or compress traffic, or log in to accounts. It has no
command-line program. The world, entity and handshake classes are fed
already-decoded data by the caller, and `ForgeHandler` hands its replies to
the `sender` callable rather than sending them itself.