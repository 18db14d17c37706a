import asyncio

import pytest

from partner_app.stores.effects import EffectScheduler


class TestEffectScheduler:

    @pytest.mark.asyncio
    async def test_schedule_records_name_without_waiting(self):
        effects = EffectScheduler()
        started = asyncio.Event()
        release = asyncio.Event()

        async def slow():
            started.set()
            await release.wait()

        effects.schedule("slow", slow())

        assert effects.scheduled == ["slow"]
        assert effects.pending == 1
        release.set()
        await effects.drain()
        assert started.is_set()
        assert effects.pending == 0

    @pytest.mark.asyncio
    async def test_failing_effect_does_not_escape(self):
        effects = EffectScheduler()

        async def boom():
            raise RuntimeError("effect failed")

        effects.schedule("boom", boom())
        await effects.drain()

        assert effects.scheduled == ["boom"]
        assert effects.pending == 0

    @pytest.mark.asyncio
    async def test_drain_waits_for_effects_scheduled_while_draining(self):
        effects = EffectScheduler()
        ran = []

        async def second():
            ran.append("second")

        async def first():
            ran.append("first")
            effects.schedule("second", second())

        effects.schedule("first", first())
        await effects.drain()

        assert ran == ["first", "second"]
        assert effects.scheduled == ["first", "second"]

    @pytest.mark.asyncio
    async def test_cancel_all(self):
        effects = EffectScheduler()

        effects.schedule("forever", asyncio.sleep(3600))
        effects.cancel_all()
        await effects.drain()

        assert effects.pending == 0
