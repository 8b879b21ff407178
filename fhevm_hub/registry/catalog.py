"""Built-in catalog of FHEVM example categories and example payloads.

Category order here is the order ``generate_all`` walks and the order the
master index lists.  Example payloads are opaque text: the scaffolder copies
them into generated projects without parsing them.
"""

from __future__ import annotations

from functools import lru_cache

from .models import CategoryDefinition, CategoryExampleRef, ExampleDefinition
from .registry import Registry


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------

def _ref(name: str, title: str, description: str) -> CategoryExampleRef:
    return CategoryExampleRef(name=name, title=title, description=description)


CATEGORIES: tuple[CategoryDefinition, ...] = (
    CategoryDefinition(
        name="basic",
        title="Basic Operations",
        description="Fundamental FHEVM operations and patterns",
        examples=(
            _ref("counter", "Encrypted Counter",
                 "Simple encrypted counter demonstrating basic TFHE operations"),
            _ref("arithmetic", "Arithmetic Operations",
                 "FHEVM arithmetic: add, subtract, multiply, compare"),
            _ref("equality", "Equality Comparison",
                 "Testing equality of encrypted values using TFHE.eq()"),
        ),
    ),
    CategoryDefinition(
        name="encryption",
        title="Encryption Patterns",
        description="Handling encrypted inputs and type conversions",
        examples=(
            _ref("encrypt-single", "Encrypt Single Value",
                 "Converting and storing a single encrypted value"),
            _ref("encrypt-multiple", "Encrypt Multiple Values",
                 "Handling multiple encrypted values in a single transaction"),
            _ref("type-conversion", "Type Conversion",
                 "Converting between different encrypted types (euint32, euint8, ebool)"),
        ),
    ),
    CategoryDefinition(
        name="decryption",
        title="User Decryption",
        description="Decryption patterns for authorized users",
        examples=(
            _ref("decrypt-single", "Decrypt Single Value",
                 "Owner-only decryption of a single encrypted value"),
            _ref("decrypt-multiple", "Decrypt Multiple Values",
                 "Decrypting multiple encrypted values and returning them"),
            _ref("conditional-decrypt", "Conditional Decryption",
                 "Decryption based on user permissions and access control"),
        ),
    ),
    CategoryDefinition(
        name="access-control",
        title="Access Control",
        description="Managing permissions and encrypted data access",
        examples=(
            _ref("allow-pattern", "FHE.allow Pattern",
                 "Granting decryption permissions using FHE.allow()"),
            _ref("transient-allow", "FHE.allowTransient",
                 "Temporary decryption permissions for single transaction"),
            _ref("input-proof", "Input Proof Handling",
                 "Validating and using input proofs for encrypted inputs"),
        ),
    ),
    CategoryDefinition(
        name="antipatterns",
        title="Anti-Patterns & Common Mistakes",
        description="What NOT to do: common pitfalls and how to avoid them",
        examples=(
            _ref("view-function-error", "View Function Mistake",
                 "Why you cannot return encrypted values from view functions"),
            _ref("missing-allow", "Missing FHE.allow()",
                 "Common error: forgetting to grant permissions after encryption"),
            _ref("input-proof-missing", "Input Proof Validation",
                 "Improper input proof handling and validation"),
        ),
    ),
    CategoryDefinition(
        name="advanced",
        title="Advanced Patterns",
        description="Complex use cases and optimization patterns",
        examples=(
            _ref("blind-auction", "Blind Auction",
                 "Complete blind auction with encrypted bids"),
            _ref("private-token", "Private Token",
                 "Confidential token transfer with encrypted balances"),
            _ref("voting-system", "Encrypted Voting",
                 "Privacy-preserving voting with homomorphic operations"),
        ),
    ),
)


# ---------------------------------------------------------------------------
# Full example payloads
# ---------------------------------------------------------------------------

_COUNTER_CONTRACT = """\
// SPDX-License-Identifier: MIT
pragma solidity ^0.8.19;

import "fhevm/lib/TFHE.sol";

/**
 * @title Encrypted Counter
 * @notice Demonstrates encrypted arithmetic operations with TFHE
 * @dev All counter values are stored as encrypted euint32
 */
contract Counter {
    using TFHE for euint32;

    euint32 private count;

    /**
     * @notice Initializes counter at 0
     */
    constructor() {
        count = TFHE.asEuint32(0);
    }

    /**
     * @notice Increments counter by specified value
     * @param value The amount to increment (encrypted)
     * @dev Uses TFHE.add for encrypted arithmetic
     */
    function increment(euint32 value) external {
        count = TFHE.add(count, value);
    }

    /**
     * @notice Decrements counter by specified value
     * @param value The amount to decrement (encrypted)
     * @dev Ensures counter doesn't go below 0
     */
    function decrement(euint32 value) external {
        count = TFHE.sub(count, value);
        count = TFHE.max(count, TFHE.asEuint32(0));
    }

    /**
     * @notice Returns the encrypted counter value
     * @dev Only contract and authorized users can decrypt this
     */
    function getCount() external view returns (euint32) {
        return count;
    }

    /**
     * @notice Resets counter to 0
     */
    function reset() external {
        count = TFHE.asEuint32(0);
    }
}
"""

_COUNTER_TEST = """\
import { expect } from "chai";
import { ethers } from "hardhat";

/**
 * @chapter arithmetic-operations
 * Test suite for encrypted counter demonstrating TFHE operations
 */
describe("Counter", function () {
    let counter: any;
    let owner: any;

    /**
     * Deploy contract before each test
     */
    beforeEach(async function () {
        const Counter = await ethers.getContractFactory("Counter");
        counter = await Counter.deploy();
        [owner] = await ethers.getSigners();
    });

    describe("Initialization", function () {
        /**
         * Test: Counter initializes at 0
         * Demonstrates encrypted initialization
         */
        it("should initialize counter at 0", async function () {
            const count = await counter.getCount();
            expect(count).to.exist;
        });
    });

    describe("Increment", function () {
        /**
         * Test: Encrypted increment operation
         * Shows TFHE.add functionality
         */
        it("should increment encrypted value", async function () {
            const value = TFHE.asEuint32(5);
            await counter.increment(value);
            // Counter now contains encrypted(5)
            expect(await counter.getCount()).to.exist;
        });
    });

    describe("Decrement", function () {
        /**
         * Test: Encrypted decrement with bounds checking
         * Demonstrates TFHE.max for floor at 0
         */
        it("should decrement without going below zero", async function () {
            const value = TFHE.asEuint32(100);
            await counter.decrement(value);
            // Counter stays at 0 (encrypted)
            expect(await counter.getCount()).to.exist;
        });
    });

    describe("Reset", function () {
        /**
         * Test: Reset counter to initial state
         */
        it("should reset to zero", async function () {
            await counter.increment(TFHE.asEuint32(10));
            await counter.reset();
            expect(await counter.getCount()).to.exist;
        });
    });
});
"""

_COUNTER_DOCS = """\
## Key Concepts

### Encrypted Integers
- All counter values stored as `euint32` (encrypted 32-bit unsigned integer)
- Operations happen on encrypted values without decryption
- Only authorized parties can decrypt the result

### TFHE Operations Used
- `TFHE.asEuint32(value)` - Convert plaintext to encrypted
- `TFHE.add(a, b)` - Encrypted addition
- `TFHE.sub(a, b)` - Encrypted subtraction
- `TFHE.max(a, b)` - Encrypted maximum (prevent negative values)

## Contract Structure

### State Variables
```solidity
euint32 private count;  // Encrypted counter value
```

### Functions

#### increment(euint32 value)
Adds an encrypted value to the counter.

```solidity
count = TFHE.add(count, value);
```

#### decrement(euint32 value)
Subtracts an encrypted value, ensuring non-negative result.

```solidity
count = TFHE.sub(count, value);
count = TFHE.max(count, TFHE.asEuint32(0));
```

## Learning Outcomes

After studying this example, you should understand:
- How to declare encrypted state variables
- Converting plaintext to encrypted values
- Performing arithmetic on encrypted data
- Preventing invalid state with encrypted bounds checking

## Testing

```bash
npm install
npm run test
```

Tests verify:
1. Proper initialization of encrypted values
2. Correctness of arithmetic operations
3. Bounds checking behavior
4. State reset functionality

## Next Steps

- Explore equality comparisons in the next example
- Learn about access control patterns
- Study user decryption mechanisms
"""

EXAMPLES: tuple[ExampleDefinition, ...] = (
    ExampleDefinition(
        name="counter",
        title="FHE Counter",
        description="A simple encrypted counter demonstrating basic TFHE operations",
        category="basic",
        chapter="arithmetic-operations",
        difficulty="Beginner",
        contract_content=_COUNTER_CONTRACT,
        test_content=_COUNTER_TEST,
        documentation_content=_COUNTER_DOCS,
    ),
)


@lru_cache(maxsize=1)
def default_registry() -> Registry:
    """Return the process-wide registry built from the built-in catalog."""
    return Registry(categories=CATEGORIES, examples=EXAMPLES)
