# coding: UTF-8


class ProvisionError(Exception):
    pass


class CreationError(ProvisionError):
    pass


class OwnershipError(ProvisionError):
    pass


class ControlFileError(ProvisionError):
    pass


class ControllerNotMountedError(ControlFileError):
    pass


class VerificationError(ProvisionError):
    pass


def describe_os_error(e: OSError) -> str:
    """ `errno` 와 `strerror` 를 진단 메시지에 붙이기 위한 형식으로 변환한다. """
    return f'({e.errno}: {e.strerror})'
