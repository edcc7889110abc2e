# SPDX-License-Identifier: Apache-2.0

# proposal types, as named by the sdk
CC_INVOKE = 'invoke'
CC_QUERY = 'query'

SUCCESS_STATUS = 200
BROADCAST_SUCCESS = 'SUCCESS'
TX_VALID = 'VALID'

DEFAULT_COMMIT_TIMEOUT = 30  # s
DEFAULT_STATE_STORE_PATH = '/tmp/fabric-client-stateStore/'
DEFAULT_CONFIG_PATH = 'config/gateway.json'
CONFIG_ENV = 'FOODTRACE_CONFIG'

PRIVATE_KEY_SUFFIX = '_sk'
GRPC_SCHEMES = ('grpc://', 'grpcs://')

# chaincode functions
CC_QUERY_USER = 'queryUser'
CC_QUERY_INGREDIENT = 'queryIngredient'
CC_QUERY_INGREDIENT_HISTORY = 'queryIngredientHistory'
CC_QUERY_FOOD = 'queryFood'
CC_QUERY_FOOD_HISTORY = 'queryFoodHistory'
CC_USER_REGISTER = 'userRegister'
CC_USER_DESTROY = 'userDestroy'
CC_INGREDIENT_ENROLL = 'ingredientEnroll'
CC_INGREDIENT_EXCHANGE = 'ingredientExchange'
CC_INGREDIENT_EXCHANGE_FOOD = 'ingredientExchangeFood'
CC_FOOD_ENROLL = 'foodEnroll'
CC_FOOD_EXCHANGE = 'foodExchange'

# legacy response bodies
PROPOSAL_FAILED_MESSAGE = 'failed'
COMMIT_FAILED_MESSAGE = 'Failed to send transaction and get ' \
                        'notifications within the timeout period.'

ERROR_HEADER = 'X-Ledger-Error'
