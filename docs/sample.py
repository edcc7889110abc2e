# SPDX-License-Identifier: Apache-2.0
#

import asyncio

from foodtrace.config import load_config
from foodtrace.ledger.gateway import Gateway

CONFIG_PATH = 'config/gateway.json'

if __name__ == "__main__":
    config = load_config(CONFIG_PATH)
    gateway = Gateway(config)
    loop = asyncio.get_event_loop()

    # Register a user, returns once the transaction is committed
    result = loop.run_until_complete(gateway.invoke(
        'userRegister', ['bob', 'U1']))
    print(result.to_dict())  # status, tx_id, validation_code, block_number

    # Enroll an ingredient owned by that user, metadata is optional
    result = loop.run_until_complete(gateway.invoke(
        'ingredientEnroll', ['I1', 'Wheat', 'U1']))
    print(result.status)  # SUCCESS

    # Query the user back, payload is the chaincode answer as text
    result = loop.run_until_complete(gateway.query('queryUser', ['U1']))
    print(result.payload)

    # The history of an ingredient, optionally filtered by type
    result = loop.run_until_complete(gateway.query(
        'queryIngredientHistory', ['I1', 'enroll']))
    print(result.payload)
