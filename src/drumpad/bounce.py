"""Offline rendering of a pad performance."""

import logging
import math

import numpy as np
import numpy.typing as npt

from drumpad.audio.renderer import MixerRenderer
from drumpad.core.clock import ManualScheduler
from drumpad.core.session import PadSession
from drumpad.models import PadAction, PadKey

logger = logging.getLogger(__name__)


def render_pad(
    session: PadSession,
    scheduler: ManualScheduler,
    renderer: MixerRenderer,
    key: PadKey,
    hold: float,
    tail: float,
    sample_rate: int,
    block_size: int = 256,
) -> npt.NDArray[np.float32]:
    """
    Render one press of `key` to an array.

    The pad is pressed at t=0 and released after `hold` seconds, then
    rendering continues for `tail` more seconds so the last hit can ring
    out. The session must be driven by `scheduler` and play through
    `renderer`. Blocks are split at the release and at every pending
    tick, so each retrigger hit starts on the frame nearest its due time.
    A tick due at the same instant as the release is cancelled by it.

    Args:
        session: Session to perform on
        scheduler: The session's virtual clock
        renderer: The session's renderer (end callbacks must run inline)
        key: Pad to press
        hold: Seconds between press and release
        tail: Seconds rendered after the release
        sample_rate: Output sample rate in Hz
        block_size: Largest number of frames rendered per clock step

    Returns:
        Rendered frames, shaped (frames,) for mono or (frames, channels)
    """
    if hold < 0 or tail < 0:
        raise ValueError("hold and tail must not be negative")

    total_frames = int(round((hold + tail) * sample_rate))
    release_frame = int(round(hold * sample_rate))
    release_time = release_frame / sample_rate

    blocks = []
    frame = 0
    released = False

    session.trigger_key(key, PadAction.PRESS)
    while frame < total_frames:
        if not released and frame >= release_frame:
            # Ticks due strictly before the release still fire; one due at
            # the same instant is cancelled by it.
            scheduler.advance_to(math.nextafter(release_time, -math.inf))
            session.trigger_key(key, PadAction.RELEASE)
            released = True

        # Anything due within half a frame of this boundary starts here
        scheduler.advance_to((frame + 0.5) / sample_rate)

        num_frames = min(block_size, total_frames - frame)
        if not released:
            num_frames = min(num_frames, release_frame - frame)
        next_due = scheduler.next_due()
        if next_due is not None:
            num_frames = min(num_frames, max(1, round(next_due * sample_rate) - frame))

        blocks.append(renderer.render_block(num_frames))
        frame += num_frames

    if not released:
        session.trigger_key(key, PadAction.RELEASE)
    session.panic()

    logger.info(f"Rendered {key} for {total_frames / sample_rate:.2f}s ({len(blocks)} blocks)")

    if not blocks:
        return renderer.render_block(0)
    return np.concatenate(blocks, axis=0)
