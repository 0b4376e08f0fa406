import eth_abi
from eth_abi.exceptions import DecodingError
from eth_abi.grammar import normalize, parse
from eth_utils import function_signature_to_4byte_selector

from mixologist_fixture.errors import EncodingMismatch

EXECUTE_MODULE = "executeModule(bytes)"
EXECUTE_MIXOLOGIST_FN = "executeMixologistFn(address[],bytes[])"
MODULE_PAYLOAD_TYPES = ["uint256", "bytes"]
SELECTOR_LENGTH = 4

# BaseMixologist.init(bytes) layout
MIXOLOGIST_INIT_TYPES = [
    "address",  # BeachBar
    "address",  # asset
    "uint256",  # asset id
    "address",  # collateral
    "uint256",  # collateral id
    "address",  # oracle
    "address[]",  # collateral swap path
    "address[]",  # tap swap path
    "address",  # lending / borrowing module
    "address",  # liquidation module
    "address",  # setter module
]


def argumentTypes(signature):
    if "(" not in signature or not signature.endswith(")"):
        raise ValueError("Malformed function signature {}".format(signature))
    (_, _, args) = signature.partition("(")
    if args.strip() == ")":
        return []
    return [normalize(c.to_type_str()) for c in parse("(" + args).components]


def canonicalSignature(signature):
    name = signature.partition("(")[0].strip()
    return "{}({})".format(name, ",".join(argumentTypes(signature)))


def selector(signature):
    return function_signature_to_4byte_selector(canonicalSignature(signature))


class ModuleDispatchEncoder:
    """
    Builds the nested calls a Mixologist market understands:

        executeModule(abi.encode(moduleId, selector + abi.encode(args)))

    The raw module call is innermost, the module tag wraps it and the
    executeModule call is always the outermost layer. Every encoder has a
    matching decoder so the nesting can be checked from tests.
    """

    def __init__(self, modules) -> None:
        self.modules = modules

    def encodeInner(self, signature, args):
        types = argumentTypes(signature)
        if len(types) != len(args):
            raise EncodingMismatch(
                "{} takes {} arguments, got {}".format(signature, len(types), len(args))
            )
        if not types:
            return selector(signature)
        return selector(signature) + eth_abi.encode(types, list(args))

    def decodeInner(self, signature, data):
        data = bytes(data)
        expected = selector(signature)
        if data[:SELECTOR_LENGTH] != expected:
            raise EncodingMismatch(
                "Selector 0x{} does not match {} (0x{})".format(
                    data[:SELECTOR_LENGTH].hex(), signature, expected.hex()
                )
            )
        types = argumentTypes(signature)
        if not types:
            return ()
        try:
            return eth_abi.decode(types, data[SELECTOR_LENGTH:])
        except DecodingError as e:
            raise EncodingMismatch("Cannot decode {}: {}".format(signature, e)) from e

    def wrapForModule(self, moduleId, inner):
        if not self.modules.isModuleId(moduleId):
            raise EncodingMismatch("Unknown module id {}".format(moduleId))
        return eth_abi.encode(MODULE_PAYLOAD_TYPES, [moduleId, bytes(inner)])

    def unwrapModule(self, payload):
        try:
            (moduleId, inner) = eth_abi.decode(MODULE_PAYLOAD_TYPES, bytes(payload))
        except DecodingError as e:
            raise EncodingMismatch("Cannot decode module payload: {}".format(e)) from e
        if not self.modules.isModuleId(moduleId):
            raise EncodingMismatch("Unknown module id {}".format(moduleId))
        return (moduleId, inner)

    def wrapForExecution(self, payload):
        return self.encodeInner(EXECUTE_MODULE, [bytes(payload)])

    def unwrapExecution(self, data):
        (payload,) = self.decodeInner(EXECUTE_MODULE, data)
        return payload

    def encodeModuleCall(self, moduleName, signature, args):
        return self.wrapForModule(
            self.modules.moduleId(moduleName), self.encodeInner(signature, args)
        )

    def wrapForBatch(self, targets, calls):
        if len(targets) != len(calls):
            raise EncodingMismatch(
                "{} targets but {} calls in batch".format(len(targets), len(calls))
            )
        return self.encodeInner(EXECUTE_MIXOLOGIST_FN, [list(targets), [bytes(c) for c in calls]])

    def unwrapBatch(self, data):
        (targets, calls) = self.decodeInner(EXECUTE_MIXOLOGIST_FN, data)
        return (list(targets), list(calls))

    def encodeMixologistInitData(
        self,
        bar,
        asset,
        assetId,
        collateral,
        collateralId,
        oracle,
        collateralSwapPath,
        tapSwapPath,
        lendingBorrowingModule,
        liquidationModule,
        setterModule,
    ):
        return eth_abi.encode(
            MIXOLOGIST_INIT_TYPES,
            [
                bar,
                asset,
                assetId,
                collateral,
                collateralId,
                oracle,
                list(collateralSwapPath),
                list(tapSwapPath),
                lendingBorrowingModule,
                liquidationModule,
                setterModule,
            ],
        )

    def decodeMixologistInitData(self, data):
        try:
            return eth_abi.decode(MIXOLOGIST_INIT_TYPES, bytes(data))
        except DecodingError as e:
            raise EncodingMismatch("Cannot decode Mixologist init data: {}".format(e)) from e
