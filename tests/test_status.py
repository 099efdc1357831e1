"""Tests for the kernel status flag, error hierarchy and runtime setup."""

import pytest
import taichi as ti


class TestErrors:
    def test_hierarchy(self):
        from spheretrace.errors import (
            DegenerateRayError,
            DegenerateSpecularError,
            ImageWriteError,
            RenderError,
            SpheretraceError,
            ZeroDirectionError,
        )

        for cls in (DegenerateRayError, DegenerateSpecularError, ZeroDirectionError):
            assert issubclass(cls, RenderError)
        assert issubclass(RenderError, SpheretraceError)
        assert issubclass(ImageWriteError, SpheretraceError)
        assert not issubclass(ImageWriteError, RenderError)

    def test_codes_are_distinct(self):
        from spheretrace.errors import RENDER_ERRORS

        assert sorted(RENDER_ERRORS) == [1, 2, 3]
        assert all(cls.code == code for code, cls in RENDER_ERRORS.items())


class TestStatusFlag:
    def test_clean_status_does_not_raise(self):
        from spheretrace.core.status import STATUS_OK, check_status, get_status

        assert get_status() == STATUS_OK
        check_status()

    @pytest.mark.parametrize(
        "code_name,error_name",
        [
            ("DEGENERATE_RAY", "DegenerateRayError"),
            ("DEGENERATE_SPECULAR", "DegenerateSpecularError"),
            ("ZERO_DIRECTION", "ZeroDirectionError"),
        ],
    )
    def test_flagged_code_maps_to_error(self, code_name, error_name):
        from spheretrace import errors
        from spheretrace.core import status

        code = getattr(status, code_name)

        @ti.kernel
        def flag():
            status.flag_error(code)

        flag()
        with pytest.raises(getattr(errors, error_name)):
            status.check_status()
        assert status.get_status() == status.STATUS_OK

    def test_highest_code_wins(self):
        from spheretrace.core.status import (
            DEGENERATE_RAY,
            ZERO_DIRECTION,
            check_status,
            flag_error,
        )
        from spheretrace.errors import ZeroDirectionError

        @ti.kernel
        def flag_many():
            for i in range(8):
                if i % 2 == 0:
                    flag_error(DEGENERATE_RAY)
                else:
                    flag_error(ZERO_DIRECTION)

        flag_many()
        with pytest.raises(ZeroDirectionError):
            check_status()

    def test_clear_status(self):
        from spheretrace.core.status import (
            DEGENERATE_SPECULAR,
            STATUS_OK,
            clear_status,
            flag_error,
            get_status,
        )

        @ti.kernel
        def flag():
            flag_error(DEGENERATE_SPECULAR)

        flag()
        assert get_status() == DEGENERATE_SPECULAR
        clear_status()
        assert get_status() == STATUS_OK


class TestRuntime:
    def test_default_worker_count(self):
        import os

        from spheretrace.core.runtime import default_worker_count

        assert default_worker_count() == (os.cpu_count() or 1)

    @pytest.mark.parametrize("workers", [0, -2])
    def test_invalid_worker_count_rejected_before_init(self, workers):
        from spheretrace.core.runtime import init_runtime

        with pytest.raises(ValueError):
            init_runtime(workers)
